"""Tests for custom exception hierarchy."""

import pytest

from clientes_loader.exceptions import (
    ClientesLoaderError,
    CommitError,
    ConfigurationError,
    DatabaseUnavailableError,
    LoadAbortedError,
    OutOfRangeError,
    PipelineStateError,
    SchemaError,
    SourceError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_is_exception(self) -> None:
        assert isinstance(ClientesLoaderError("test"), Exception)

    @pytest.mark.parametrize(
        "exc_type",
        [
            CommitError,
            ConfigurationError,
            DatabaseUnavailableError,
            LoadAbortedError,
            OutOfRangeError,
            PipelineStateError,
            SchemaError,
            SourceError,
        ],
    )
    def test_fatal_errors_share_base(self, exc_type: type) -> None:
        """The CLI maps every subclass to a fatal exit status."""
        assert isinstance(exc_type("test"), ClientesLoaderError)

    def test_out_of_range_attributes(self) -> None:
        err = OutOfRangeError("line 3 too short", line_number=3, width=12)

        assert str(err) == "line 3 too short"
        assert err.line_number == 3
        assert err.width == 12

    def test_load_aborted_attributes(self) -> None:
        err = LoadAbortedError("aborted", line_number=9)

        assert err.line_number == 9
        assert LoadAbortedError("aborted").line_number is None
