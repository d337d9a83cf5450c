# utils/options.py
"""
Request options carried by every SYSPRO object.

Options describe the context an object was fetched in (session token,
company, endpoint, per-call identifiers). The recognized keys are fixed;
only the copyable subset follows an object through a deep copy, the rest
belongs to the call that produced it.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import Field

from utils.base_model import ImmutableModel

logger = logging.getLogger(__name__)

# Keys that survive a deep copy; request_id and idempotency_key are call-local
OPTS_COPYABLE = frozenset({"user_id", "company_id", "api_base"})


class RequestOptions(ImmutableModel):
    """Normalized, immutable set of recognized request options."""
    model_config = {
        "extra": "ignore",
    }

    user_id: Optional[Any] = Field(default=None, description="Session token returned by a SYSPRO logon")
    company_id: Optional[Any] = Field(default=None, description="SYSPRO company the session is bound to")
    api_base: Optional[Any] = Field(default=None, description="Base URL of the e.net REST service")
    request_id: Optional[Any] = Field(default=None, description="Identifier of the call that produced the object")
    idempotency_key: Optional[Any] = Field(default=None, description="Key sent with a single mutating call")

    def as_dict(self) -> Dict[str, Any]:
        """Options that are actually set, values untouched."""
        return {name: value for name, value in self.field_values().items() if value is not None}

    def copyable(self) -> "RequestOptions":
        """Restrict to the options allowed to propagate through a deep copy."""
        return RequestOptions.model_validate(
            {name: value for name, value in self.as_dict().items() if name in OPTS_COPYABLE}
        )

    def merge(self, other: "RequestOptions") -> "RequestOptions":
        """New options where the set fields of other take precedence."""
        changes = other.as_dict()
        if not changes:
            return self
        return self.with_changes(**changes)


def normalize_opts(opts: Union[None, str, Mapping[str, Any], RequestOptions]) -> RequestOptions:
    """
    Normalize caller supplied options against the recognized option schema.

    A bare string is taken as the session token. Unknown keys in a mapping
    are dropped so that newer callers do not break older clients.

    Raises:
        TypeError: If opts is neither None, a string, a mapping nor RequestOptions
    """
    if opts is None:
        return RequestOptions()
    if isinstance(opts, RequestOptions):
        return opts
    if isinstance(opts, str):
        return RequestOptions(user_id=opts)
    if not isinstance(opts, Mapping):
        raise TypeError(
            f"normalize_opts expects a string or a mapping, got {type(opts).__name__}"
        )

    unknown = set(opts) - set(RequestOptions.model_fields)
    if unknown:
        logger.debug(f"Dropping unrecognized option(s): {', '.join(sorted(map(str, unknown)))}")

    return RequestOptions.model_validate(
        {key: value for key, value in opts.items() if key not in unknown}
    )
