"""Helpers shared by API resources."""

from dataclasses import asdict
from uuid import UUID

import falcon
import falcon.asgi

from smaccess.application.context import CurrentContext
from smaccess.domain.entities import BaseAccessPolicy
from smaccess.domain.exceptions import BadRequest, NotFound


def require_context(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> CurrentContext | None:
    """Return the caller context, or set 401 and return None."""
    current = getattr(req.context, "current", None)
    if current is None:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
    return current


def parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None


def set_error(resp: falcon.asgi.Response, error: NotFound | BadRequest) -> None:
    """Map domain errors to responses. Denials are reported as 404, never 403."""
    if isinstance(error, NotFound):
        resp.status = falcon.HTTP_404
        resp.media = {"error": "Resource not found"}
    else:
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(error)}


def set_not_found(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": "Resource not found"}


def policy_to_dict(policy: BaseAccessPolicy) -> dict:
    """Serialize any access policy variant."""
    data = {
        "id": str(policy.id),
        "type": type(policy).__name__,
        "read": policy.read,
        "write": policy.write,
        "creation_date": policy.creation_date.isoformat(),
        "revision_date": policy.revision_date.isoformat(),
    }
    for name, value in asdict(policy).items():
        if name.endswith("_id"):
            data[name] = str(value)
    return data
