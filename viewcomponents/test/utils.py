import threading
import time
from importlib import import_module

from viewcomponents.handlers import DjangoTemplateHandler


class CountingHandler:
    """
    A template handler that compiles with the Django template engine and counts
    how many times it has been asked to compile.
    """

    def __init__(self, delay=0, on_compile=None):
        self.calls = 0
        self.templates = []
        self.delay = delay
        self.on_compile = on_compile
        self._lock = threading.Lock()

    def __call__(self, template):
        with self._lock:
            self.calls += 1
            self.templates.append(template)
        if self.on_compile is not None:
            self.on_compile(template)
        if self.delay:
            time.sleep(self.delay)
        return DjangoTemplateHandler()(template)


class BinaryCountingHandler(CountingHandler):
    def __call__(self, template, source):
        self.sources = getattr(self, "sources", []) + [source]
        template.source = source
        return super().__call__(template)


def get_broken_component(module_name, class_name):
    # Broken fixtures are imported on demand so that they are not registered
    # when the system checks run at startup.
    module = import_module("viewcomponents.test.broken_components." + module_name)
    return getattr(module, class_name)
