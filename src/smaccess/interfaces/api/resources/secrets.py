"""Secrets API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from smaccess.application.dto.secret_dto import SecretUpdateInput
from smaccess.application.use_cases.secret.update_secret import UpdateSecretUseCase
from smaccess.domain.entities import Secret
from smaccess.domain.exceptions import BadRequest, NotFound
from smaccess.interfaces.api.resources.common import parse_uuid, require_context, set_error


def _secret_to_dict(secret: Secret) -> dict:
    return {
        "id": str(secret.id),
        "organization_id": str(secret.organization_id),
        "key": secret.key,
        "value": secret.value,
        "note": secret.note,
        "project_ids": [str(p) for p in secret.project_ids],
        "creation_date": secret.creation_date.isoformat(),
        "revision_date": secret.revision_date.isoformat(),
    }


class SecretResource:
    """PUT /v1/secrets/{secret_id} - update a secret, optionally moving it."""

    def __init__(self, update_secret: UpdateSecretUseCase) -> None:
        self._update = update_secret

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        secret_id: str,
    ) -> None:
        context = require_context(req, resp)
        if not context:
            return
        sec_id = parse_uuid(secret_id)
        if not sec_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid secret ID"}
            return

        body = await req.get_media(default_when_empty={})
        try:
            key = body["key"]
            value = body["value"]
            note = body["note"]
            project_ids = [UUID(p) for p in body.get("project_ids") or []]
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (TypeError, ValueError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        updated = SecretUpdateInput(
            id=sec_id, key=key, value=value, note=note, project_ids=project_ids
        )
        try:
            secret = await self._update.execute(context, updated, context.user_id)
            resp.media = _secret_to_dict(secret)
            resp.status = falcon.HTTP_200
        except (NotFound, BadRequest) as e:
            set_error(resp, e)
