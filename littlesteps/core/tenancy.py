"""Family-scoped access.

The family identifier is the only credential the journal knows about: whoever
presents it gets full read/write access to that family's profile, timeline
and media. There is no session, expiry or revocation. Every store call takes
an explicit ``TenantId`` so a query can never fall back to ambient state.
"""

from dataclasses import dataclass

from littlesteps.core.errors import MissingTenantError


@dataclass(frozen=True, slots=True)
class TenantId:
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise MissingTenantError("Family identifier is empty.")

    def __str__(self) -> str:
        return self.value


def resolve_tenant(raw_value: str | None) -> TenantId:
    """Turn a raw header value into a ``TenantId``.

    No existence check happens here; unknown tokens simply match no rows
    downstream.
    """
    token = (raw_value or "").strip()
    if not token:
        raise MissingTenantError("Missing family identifier.")
    return TenantId(token)
