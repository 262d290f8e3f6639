"""API resource tests."""

from uuid import uuid4

import pytest
from falcon.testing import TestClient

from smaccess.domain.entities import Group, UserProjectAccessPolicy
from smaccess.domain.value_objects import OrganizationUserType

from tests.conftest import make_context, make_member, make_project, make_secret, make_service_account


class TestAuth:
    def test_unauthenticated_request_is_401(self, client: TestClient) -> None:
        r = client.simulate_get(f"/v1/projects/{uuid4()}")
        assert r.status_code == 401

    def test_invalid_id_is_400(self, client: TestClient, auth, organization_id) -> None:
        auth.current = make_context(organization_id)
        r = client.simulate_get("/v1/projects/not-a-uuid")
        assert r.status_code == 400


class TestProjectAccessPolicies:
    def test_admin_creates_policies(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id))
        member = make_member(uow, organization_id, uuid4())
        group = uow.groups.add(Group(id=uuid4(), organization_id=organization_id, name="devs"))
        sa = uow.service_accounts.add(make_service_account(organization_id))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.ADMIN)

        r = client.simulate_post(
            f"/v1/projects/{project.id}/access-policies",
            json={
                "user_access_policy_requests": [
                    {"grantee_id": str(member.id), "read": True, "write": False}
                ],
                "group_access_policy_requests": [
                    {"grantee_id": str(group.id), "read": True, "write": True}
                ],
                "service_account_access_policy_requests": [
                    {"grantee_id": str(sa.id), "read": True, "write": False}
                ],
            },
        )

        assert r.status_code == 200
        items = r.json["items"]
        assert len(items) == 3
        types = {i["type"] for i in items}
        assert types == {
            "UserProjectAccessPolicy",
            "GroupProjectAccessPolicy",
            "ServiceAccountProjectAccessPolicy",
        }
        assert all(i["granted_project_id"] == str(project.id) for i in items)

    def test_duplicate_grantee_is_400(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id))
        grantee = str(uuid4())
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_post(
            f"/v1/projects/{project.id}/access-policies",
            json={
                "user_access_policy_requests": [
                    {"grantee_id": grantee, "read": True},
                    {"grantee_id": grantee, "read": True, "write": True},
                ]
            },
        )

        assert r.status_code == 400
        assert r.json["error"] == "Resources must be unique"
        assert uow.access_policies._by_id == {}

    def test_write_without_read_is_400(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_post(
            f"/v1/projects/{project.id}/access-policies",
            json={"user_access_policy_requests": [{"grantee_id": str(uuid4()), "write": True}]},
        )

        assert r.status_code == 400

    @pytest.mark.parametrize(
        "flags", [{"read": "false", "write": "no"}, {"read": 1}, {"read": True, "write": 0}]
    )
    def test_non_boolean_flags_are_400(
        self, client: TestClient, auth, uow, organization_id, flags
    ) -> None:
        project = uow.projects.add(make_project(organization_id))
        member = make_member(uow, organization_id, uuid4())
        auth.current = make_context(organization_id, org_type=OrganizationUserType.ADMIN)

        r = client.simulate_post(
            f"/v1/projects/{project.id}/access-policies",
            json={"user_access_policy_requests": [{"grantee_id": str(member.id), **flags}]},
        )

        assert r.status_code == 400
        assert "must be a boolean" in r.json["error"]
        assert uow.access_policies._by_id == {}

    def test_member_of_other_organization_is_400(
        self, client: TestClient, auth, uow, organization_id
    ) -> None:
        project = uow.projects.add(make_project(organization_id))
        outsider = make_member(uow, uuid4(), uuid4())
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_post(
            f"/v1/projects/{project.id}/access-policies",
            json={"user_access_policy_requests": [{"grantee_id": str(outsider.id), "read": True}]},
        )

        assert r.status_code == 400
        assert uow.access_policies._by_id == {}

    def test_user_without_write_gets_404(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id))
        auth.current = make_context(organization_id)

        r = client.simulate_post(
            f"/v1/projects/{project.id}/access-policies",
            json={"user_access_policy_requests": [{"grantee_id": str(uuid4()), "read": True}]},
        )

        assert r.status_code == 404
        assert r.json["error"] == "Resource not found"


class TestAccessPolicy:
    def test_update_and_delete(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id))
        member = make_member(uow, organization_id, uuid4())
        policy = UserProjectAccessPolicy(
            organization_user_id=member.id, granted_project_id=project.id, read=True
        )
        uow.access_policies.add(policy)
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_put(
            f"/v1/access-policies/{policy.id}", json={"read": True, "write": True}
        )
        assert r.status_code == 200
        assert r.json["write"] is True

        r = client.simulate_delete(f"/v1/access-policies/{policy.id}")
        assert r.status_code == 204
        assert policy.id not in uow.access_policies._by_id

    @pytest.mark.parametrize("body", [{"read": "true"}, {"read": True, "write": "false"}])
    def test_update_with_non_boolean_flag_is_400(
        self, client: TestClient, auth, uow, organization_id, body
    ) -> None:
        project = uow.projects.add(make_project(organization_id))
        member = make_member(uow, organization_id, uuid4())
        policy = UserProjectAccessPolicy(
            organization_user_id=member.id, granted_project_id=project.id, read=True
        )
        uow.access_policies.add(policy)
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_put(f"/v1/access-policies/{policy.id}", json=body)

        assert r.status_code == 400
        assert policy.write is False

    def test_delete_missing_is_404(self, client: TestClient, auth, organization_id) -> None:
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)
        r = client.simulate_delete(f"/v1/access-policies/{uuid4()}")
        assert r.status_code == 404


class TestPeopleAccessPolicies:
    def test_get_and_replace_project_people(
        self, client: TestClient, auth, uow, organization_id
    ) -> None:
        project = uow.projects.add(make_project(organization_id))
        member = make_member(uow, organization_id, uuid4())
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_put(
            f"/v1/projects/{project.id}/access-policies/people",
            json={
                "user_access_policy_requests": [
                    {"grantee_id": str(member.id), "read": True, "write": True}
                ]
            },
        )
        assert r.status_code == 200
        assert len(r.json["user_access_policies"]) == 1

        r = client.simulate_get(f"/v1/projects/{project.id}/access-policies/people")
        assert r.status_code == 200
        assert r.json["user_access_policies"][0]["organization_user_id"] == str(member.id)
        assert r.json["group_access_policies"] == []

    def test_replace_with_foreign_group_is_404(
        self, client: TestClient, auth, uow, organization_id
    ) -> None:
        sa = uow.service_accounts.add(make_service_account(organization_id))
        group = uow.groups.add(Group(id=uuid4(), organization_id=uuid4(), name="foreign"))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_put(
            f"/v1/service-accounts/{sa.id}/access-policies/people",
            json={"group_access_policy_requests": [{"grantee_id": str(group.id), "read": True}]},
        )

        assert r.status_code == 404


class TestProjects:
    def test_get_project_with_permissions(
        self, client: TestClient, auth, uow, organization_id
    ) -> None:
        user_id = uuid4()
        project = uow.projects.add(make_project(organization_id, "billing"))
        member = make_member(uow, organization_id, user_id)
        uow.access_policies.add(
            UserProjectAccessPolicy(
                organization_user_id=member.id, granted_project_id=project.id, read=True
            )
        )
        auth.current = make_context(organization_id, user_id=user_id)

        r = client.simulate_get(f"/v1/projects/{project.id}")

        assert r.status_code == 200
        assert r.json["name"] == "billing"
        assert r.json["read"] is True
        assert r.json["write"] is False

    def test_get_project_without_access_is_404(
        self, client: TestClient, auth, uow, organization_id
    ) -> None:
        project = uow.projects.add(make_project(organization_id))
        auth.current = make_context(organization_id)
        r = client.simulate_get(f"/v1/projects/{project.id}")
        assert r.status_code == 404

    def test_rename_project(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id, "old"))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.ADMIN)

        r = client.simulate_put(f"/v1/projects/{project.id}", json={"name": "new"})

        assert r.status_code == 200
        assert r.json["name"] == "new"

    def test_rename_project_missing_name(self, client: TestClient, auth, uow, organization_id) -> None:
        project = uow.projects.add(make_project(organization_id))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.ADMIN)
        r = client.simulate_put(f"/v1/projects/{project.id}", json={})
        assert r.status_code == 400


class TestSecrets:
    def test_admin_moves_secret(self, client: TestClient, auth, uow, organization_id) -> None:
        old_project = uow.projects.add(make_project(organization_id))
        new_project = uow.projects.add(make_project(organization_id))
        secret = uow.secrets.add(make_secret(organization_id, old_project.id))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)

        r = client.simulate_put(
            f"/v1/secrets/{secret.id}",
            json={
                "key": "2.k",
                "value": "2.v",
                "note": "2.n",
                "project_ids": [str(new_project.id)],
            },
        )

        assert r.status_code == 200
        assert r.json["project_ids"] == [str(new_project.id)]
        assert r.json["key"] == "2.k"

    def test_missing_field_is_400(self, client: TestClient, auth, uow, organization_id) -> None:
        secret = uow.secrets.add(make_secret(organization_id))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)
        r = client.simulate_put(f"/v1/secrets/{secret.id}", json={"key": "2.k"})
        assert r.status_code == 400

    def test_two_projects_is_400(self, client: TestClient, auth, uow, organization_id) -> None:
        secret = uow.secrets.add(make_secret(organization_id))
        auth.current = make_context(organization_id, org_type=OrganizationUserType.OWNER)
        r = client.simulate_put(
            f"/v1/secrets/{secret.id}",
            json={
                "key": "2.k",
                "value": "2.v",
                "note": "2.n",
                "project_ids": [str(uuid4()), str(uuid4())],
            },
        )
        assert r.status_code == 400
        assert r.json["error"] == "Only one project assignment is supported."
