import logging
from dataclasses import dataclass
import pytest
from utils.options import OPTS_COPYABLE, RequestOptions, normalize_opts


class TestNormalizeOpts:
    """Test cases for normalize_opts."""

    def test_none_gives_empty_options(self):
        """Test that no options normalize to an empty set."""
        opts = normalize_opts(None)
        assert opts.as_dict() == {}

    def test_string_is_session_token(self):
        """Test that a bare string is taken as the user id."""
        opts = normalize_opts("sess_123")
        assert opts.user_id == "sess_123"
        assert opts.as_dict() == {"user_id": "sess_123"}

    def test_mapping(self):
        """Test normalizing a mapping of recognized options."""
        opts = normalize_opts({"user_id": "x", "company_id": "EDU1"})
        assert opts.user_id == "x"
        assert opts.company_id == "EDU1"
        assert opts.request_id is None

    def test_unknown_keys_dropped(self, caplog):
        """Test that unrecognized keys are dropped rather than rejected."""
        with caplog.at_level(logging.DEBUG, logger="utils.options"):
            opts = normalize_opts({"user_id": "x", "colour": "blue"})

        assert opts.as_dict() == {"user_id": "x"}
        assert "colour" in caplog.text

    def test_request_options_passed_through(self):
        """Test that already normalized options are returned unchanged."""
        opts = RequestOptions(user_id="x")
        assert normalize_opts(opts) is opts

    def test_invalid_type(self):
        """Test that non-mapping options are a programming error."""
        with pytest.raises(TypeError):
            normalize_opts(42)


class TestRequestOptions:
    """Test cases for RequestOptions."""

    def test_frozen(self):
        """Test that options cannot be changed in place."""
        opts = RequestOptions(user_id="x")
        with pytest.raises(Exception):
            opts.user_id = "y"

    def test_copyable_subset(self):
        """Test that call-local options do not survive copyable()."""
        opts = RequestOptions(user_id="x", request_id="y", api_base="https://erp.local/SYSPROWCFService/Rest")

        copied = opts.copyable()

        assert copied.user_id == "x"
        assert copied.api_base == "https://erp.local/SYSPROWCFService/Rest"
        assert copied.request_id is None
        assert set(copied.as_dict()) <= OPTS_COPYABLE

    def test_call_local_keys_not_copyable(self):
        """Test the fixed copyable key set."""
        assert "request_id" not in OPTS_COPYABLE
        assert "idempotency_key" not in OPTS_COPYABLE
        assert "user_id" in OPTS_COPYABLE

    def test_merge(self):
        """Test that set fields of the other options win."""
        base = RequestOptions(user_id="x", company_id="EDU1")

        merged = base.merge(RequestOptions(company_id="EDU2", request_id="r1"))

        assert merged.as_dict() == {"user_id": "x", "company_id": "EDU2", "request_id": "r1"}
        assert base.company_id == "EDU1"

    def test_merge_empty_returns_self(self):
        """Test merging nothing does not create a new instance."""
        base = RequestOptions(user_id="x")
        assert base.merge(RequestOptions()) is base


@dataclass
class Connection:
    """Stand-in for a transport client handed over as an option."""
    host: str


class TestOpaqueOptionValues:
    """Test cases for option values of any type."""

    def test_non_string_values(self):
        """Test that option values are not coerced or rejected."""
        opts = normalize_opts({"user_id": 42, "company_id": ("EDU1", 2), "retries": 3})

        assert opts.user_id == 42
        assert opts.company_id == ("EDU1", 2)
        assert opts.as_dict() == {"user_id": 42, "company_id": ("EDU1", 2)}

    def test_objects_kept_as_is(self):
        """Test that an arbitrary object survives normalization, merge and copyable()."""
        connection = Connection(host="erp.local")
        opts = normalize_opts({"api_base": connection, "request_id": object()})

        merged = RequestOptions(user_id="x").merge(opts)

        assert opts.api_base is connection
        assert merged.api_base is connection
        assert merged.copyable().api_base is connection
        assert merged.copyable().request_id is None
