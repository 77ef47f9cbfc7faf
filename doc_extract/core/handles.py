import importlib
import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class LazyHandle:
    """
    Process-wide handle to an external library, created on first use.

    Concurrent first calls to get() coalesce into a single initialization.
    A failed initialization is not cached; the next get() retries.
    """

    def __init__(self, name: str, factory: Callable[[], Any]):
        self.name = name
        self._factory = factory
        self._value: Optional[Any] = None
        self._ready = False
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._ready

    def get(self) -> Any:
        if self._ready:
            return self._value

        with self._lock:
            if not self._ready:
                logger.debug("Initializing %s", self.name)
                self._value = self._factory()
                self._ready = True
        return self._value

    def reset(self):
        with self._lock:
            self._value = None
            self._ready = False


def module_handle(module_name: str) -> LazyHandle:
    return LazyHandle(module_name, lambda: importlib.import_module(module_name))


PDFPLUMBER = module_handle("pdfplumber")
OPENPYXL = module_handle("openpyxl")
