"""
Pytest configuration for sunlark tests.

Provides:
- Hypothesis profiles (select with HYPOTHESIS_PROFILE)
- A fresh Thread per test
- make_count / make_map: build objects through the registered builtins
- TrackedIterable: a host iterable that records next()/done() traffic
"""

import logging
import os

import pytest
from hypothesis import settings

from sunlark.core.value import Iterable, Iterator
from sunlark.logger import _SunlarkHandler
from sunlark.module import BUILTINS_MODULE, ITERTOOLS_MODULE
from sunlark.thread import Thread, call

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "default",
    print_blob=True,  # Print reproduction blob on failure
    derandomize=False,
)

settings.register_profile(
    "ci",
    print_blob=True,
    derandomize=True,
    max_examples=300,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Shared Test Utilities
# =============================================================================


class TrackedIterable(Iterable):
    """
    Iterable over a fixed tuple that counts what its iterators were asked.

    Attributes:
        pulls: total next() calls across all iterators (including the one
            that reported exhaustion)
        yielded: values actually handed out, in order
        done_calls: total done() calls across all iterators (counted before
            fail_on_done makes done() raise)
        frozen: set by freeze()
    """

    def __init__(self, elems, fail_on_iterate=False, fail_on_done=False):
        self.elems = tuple(elems)
        self.fail_on_iterate = fail_on_iterate
        self.fail_on_done = fail_on_done
        self.pulls = 0
        self.yielded = []
        self.done_calls = 0
        self.opened = 0
        self.frozen = False

    def string(self):
        return f"tracked{self.elems!r}"

    def type_name(self):
        return "tracked"

    def freeze(self):
        self.frozen = True

    def truth(self):
        return bool(self.elems)

    def hash(self):
        return hash(self.elems)

    def iterate(self, thread=None):
        if self.fail_on_iterate:
            raise RuntimeError("cannot iterate")
        self.opened += 1
        return _TrackedIterator(self)


class _TrackedIterator(Iterator):
    def __init__(self, owner):
        self.owner = owner
        self.i = 0

    def next(self):
        self.owner.pulls += 1
        if self.i < len(self.owner.elems):
            x = self.owner.elems[self.i]
            self.i += 1
            self.owner.yielded.append(x)
            return x, True
        return None, False

    def done(self):
        self.owner.done_calls += 1
        if self.owner.fail_on_done:
            raise RuntimeError("cannot release")


@pytest.fixture
def thread():
    return Thread("test")


@pytest.fixture
def make_count(thread):
    def _make(*args, **kwargs):
        return call(thread, ITERTOOLS_MODULE.get("count"), args, kwargs)
    return _make


@pytest.fixture
def make_map(thread):
    def _make(*args, **kwargs):
        return call(thread, BUILTINS_MODULE.get("map"), args, kwargs)
    return _make


@pytest.fixture
def tracked():
    return TrackedIterable


@pytest.fixture(autouse=True)
def _reset_sunlark_logging():
    """Drop handlers installed by configure_logging() so they never outlive a test's captured stderr."""
    yield
    root = logging.getLogger("sunlark")
    for h in list(root.handlers):
        if isinstance(h, _SunlarkHandler):
            root.removeHandler(h)
    root.setLevel(logging.NOTSET)
