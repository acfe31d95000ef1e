"""Tests for the exception hierarchy."""

import pytest

from command_finder.exceptions import (
    BuildFailedError,
    CommandFinderError,
    InvocationError,
    SessionClosedError,
    StoreUnavailableError,
)

_ALL = [
    BuildFailedError,
    InvocationError,
    SessionClosedError,
    StoreUnavailableError,
]


class TestExceptionHierarchy:
    def test_base_exception(self):
        e = CommandFinderError("base error")
        assert str(e) == "base error"
        assert isinstance(e, Exception)

    @pytest.mark.parametrize("exc_type", _ALL)
    def test_inherits_base(self, exc_type):
        assert issubclass(exc_type, CommandFinderError)

    def test_build_failed_is_not_builtin_index_error(self):
        assert not issubclass(BuildFailedError, IndexError)

    def test_catch_all_with_base(self):
        for exc_type in _ALL:
            with pytest.raises(CommandFinderError):
                raise exc_type("x")

    def test_does_not_catch_wrong_type(self):
        with pytest.raises(StoreUnavailableError):
            try:
                raise StoreUnavailableError("store")
            except BuildFailedError:
                pytest.fail("Should not catch StoreUnavailableError as BuildFailedError")

    def test_with_cause(self):
        cause = OSError("disk full")
        try:
            raise BuildFailedError("build failed") from cause
        except BuildFailedError as e:
            assert e.__cause__ is cause
