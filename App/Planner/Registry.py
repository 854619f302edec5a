import logging
import threading
from collections import OrderedDict

logger = logging.getLogger(__name__)


class ControllerRegistry:
    """Keeps one SearchController per client namespace.

    At most ``max_size`` controllers are held; the least recently used one is
    dropped to make room. A dropped client keeps its stored data and starts
    over from an idle controller on its next request.
    """

    def __init__(self, factory, max_size=1000):
        if max_size < 1:
            raise ValueError('max_size must be at least 1')
        self._factory = factory
        self.max_size = max_size
        self._controllers = OrderedDict()
        self._lock = threading.Lock()

    def get(self, client_id):
        with self._lock:
            controller = self._controllers.get(client_id)
            if controller is not None:
                self._controllers.move_to_end(client_id)
                return controller

            controller = self._factory(client_id)
            self._controllers[client_id] = controller
            while len(self._controllers) > self.max_size:
                evicted, _ = self._controllers.popitem(last=False)
                logger.info(f"Evicted idle controller for client {evicted}")
            return controller

    def discard(self, client_id):
        with self._lock:
            return self._controllers.pop(client_id, None) is not None

    def __contains__(self, client_id):
        with self._lock:
            return client_id in self._controllers

    def __len__(self):
        with self._lock:
            return len(self._controllers)
