"""Service-layer exceptions translated to HTTP responses by the API routers."""


class UserNotFoundError(LookupError):
    """No user exists with the requested id."""


class ProjectNotFoundError(LookupError):
    """No project exists with the requested id."""


class EntryNotFoundError(LookupError):
    """No experience/education entry exists with the requested id."""


class DomainConflictError(ValueError):
    """The requested domain is already bound to another user."""

    def __init__(self, domain: str, owner_id: str) -> None:
        super().__init__(f"Domain {domain!r} is already in use")
        self.domain = domain
        self.owner_id = owner_id


class EmptyUpdateError(ValueError):
    """An update request carried no fields to change."""

    def __init__(self) -> None:
        super().__init__("No valid fields to update.")


class ResolutionUnavailableError(RuntimeError):
    """The user store could not be queried while resolving a host."""
