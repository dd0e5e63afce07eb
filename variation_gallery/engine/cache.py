import threading
from typing import Callable, Dict, Optional, Tuple

from variation_gallery.schemas.gallery import GalleryDataset

ComputeFn = Callable[[], Optional[GalleryDataset]]


class DatasetCache:
    """
    Prepared datasets keyed by (product id, translate flag).

    Entries are never evicted. Two callers racing on the same missing key both
    compute and the later write wins; both values are equal.
    """

    def __init__(self):
        self._entries: Dict[Tuple[int, bool], GalleryDataset] = {}
        self._lock = threading.Lock()

    def __contains__(self, key: Tuple[int, bool]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, product_id: int, translate: bool, compute: ComputeFn) -> Optional[GalleryDataset]:
        key = (product_id, bool(translate))
        dataset = self._entries.get(key)
        if dataset is None:
            dataset = compute()
            if dataset is None:
                return None
            with self._lock:
                self._entries[key] = dataset
        return dataset.copy(deep=True)
