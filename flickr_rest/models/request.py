"""Outgoing REST request value."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional
from urllib.parse import urlencode

from flickr_rest.utils.signer import SIGNATURE_KEY, signed_parameters


@dataclass(frozen=True)
class Request:
    """One call to a remote method: key, method name and string arguments."""

    api_key: str
    method: str
    args: Dict[str, str] = field(default_factory=dict)

    def signed(self, secret: str) -> "Request":
        """Return a new request whose arguments include ``api_sig``."""

        args = signed_parameters(self.args, self.method, self.api_key, secret)
        return replace(self, args=args)

    @property
    def signature(self) -> Optional[str]:
        return self.args.get(SIGNATURE_KEY)

    def query(self) -> Dict[str, str]:
        """Full outgoing parameter set: arguments plus ``api_key`` and ``method``."""

        params = dict(self.args)
        params["api_key"] = self.api_key
        params["method"] = self.method
        return params

    def url(self, endpoint: str) -> str:
        return f"{endpoint}?{urlencode(self.query())}"
