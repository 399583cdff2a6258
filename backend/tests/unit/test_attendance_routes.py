"""
Name: Attendance Endpoint Tests

Responsibilities:
  - Sign in with geolocation, sign out (with/without body)
  - Coordinate validation and double sign-out conflict
  - INTERN scoping for sign in/out and listing
"""

import pytest

from intern_api.users import UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def staff_headers(make_user, auth_header):
    return auth_header(make_user("admin@univen.ac.za", UserRole.ADMIN))


def _sign_in(client, headers, intern_id, **geo):
    return client.post(
        "/api/attendance/signin", json={"internId": intern_id, **geo}, headers=headers
    )


class TestSignIn:
    def test_records_location(self, client, make_intern, auth_header):
        user, intern = make_intern("a@univen.ac.za")

        response = _sign_in(
            client,
            auth_header(user),
            intern.id,
            location="Thohoyandou",
            latitude=-22.97,
            longitude=30.44,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["internId"] == intern.id
        assert body["status"] == "SIGNED_IN"
        assert body["location"] == "Thohoyandou"
        assert body["latitude"] == -22.97
        assert body["timeOut"] is None

    @pytest.mark.parametrize(
        "geo, message",
        [
            ({"latitude": 91}, "latitude must be between -90 and 90"),
            ({"longitude": -181}, "longitude must be between -180 and 180"),
        ],
    )
    def test_rejects_out_of_range_coordinates(
        self, client, make_intern, staff_headers, geo, message
    ):
        _, intern = make_intern("a@univen.ac.za")

        response = _sign_in(client, staff_headers, intern.id, **geo)

        assert response.status_code == 400
        assert response.json()["error"] == message

    def test_unknown_intern_is_404(self, client, staff_headers):
        assert _sign_in(client, staff_headers, 404).status_code == 404

    def test_missing_intern_id_for_staff_is_400(self, client, staff_headers):
        response = client.post("/api/attendance/signin", json={}, headers=staff_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "internId is required"

    def test_intern_signs_in_as_self(self, client, make_intern, auth_header):
        user_a, intern_a = make_intern("a@univen.ac.za")
        _, intern_b = make_intern("b@univen.ac.za")

        response = _sign_in(client, auth_header(user_a), intern_b.id)

        assert response.json()["internId"] == intern_a.id


class TestSignOut:
    def test_sign_out_without_body(self, client, make_intern, auth_header):
        user, intern = make_intern("a@univen.ac.za")
        record = _sign_in(client, auth_header(user), intern.id, location="Lab").json()

        response = client.put(
            f"/api/attendance/signout/{record['attendanceId']}", headers=auth_header(user)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "SIGNED_OUT"
        assert body["timeOut"] is not None
        assert body["location"] == "Lab"

    def test_sign_out_updates_location(self, client, make_intern, auth_header):
        user, intern = make_intern("a@univen.ac.za")
        record = _sign_in(client, auth_header(user), intern.id).json()

        response = client.put(
            f"/api/attendance/signout/{record['attendanceId']}",
            json={"location": "Home", "latitude": 10.5, "longitude": 20.25},
            headers=auth_header(user),
        )

        body = response.json()
        assert body["location"] == "Home"
        assert body["longitude"] == 20.25

    def test_double_sign_out_is_409(self, client, make_intern, staff_headers):
        _, intern = make_intern("a@univen.ac.za")
        record = _sign_in(client, staff_headers, intern.id).json()
        path = f"/api/attendance/signout/{record['attendanceId']}"

        client.put(path, headers=staff_headers)
        response = client.put(path, headers=staff_headers)

        assert response.status_code == 409

    def test_other_intern_cannot_sign_out(self, client, make_intern, auth_header):
        user_a, intern_a = make_intern("a@univen.ac.za")
        user_b, _ = make_intern("b@univen.ac.za")
        record = _sign_in(client, auth_header(user_a), intern_a.id).json()

        response = client.put(
            f"/api/attendance/signout/{record['attendanceId']}", headers=auth_header(user_b)
        )

        assert response.status_code == 403

    def test_unknown_record_is_404(self, client, staff_headers):
        response = client.put("/api/attendance/signout/999", headers=staff_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Attendance record not found with id: 999"


class TestListing:
    def test_staff_see_all_interns_see_own(
        self, client, make_intern, auth_header, staff_headers
    ):
        user_a, intern_a = make_intern("a@univen.ac.za")
        _, intern_b = make_intern("b@univen.ac.za")
        _sign_in(client, staff_headers, intern_a.id)
        _sign_in(client, staff_headers, intern_b.id)

        everything = client.get("/api/attendance", headers=staff_headers).json()
        own = client.get("/api/attendance", headers=auth_header(user_a)).json()
        peeked = client.get(
            f"/api/attendance/intern/{intern_b.id}", headers=auth_header(user_a)
        ).json()

        assert {r["internId"] for r in everything} == {intern_a.id, intern_b.id}
        assert {r["internId"] for r in own} == {intern_a.id}
        assert {r["internId"] for r in peeked} == {intern_a.id}

    def test_requires_token(self, client):
        assert client.get("/api/attendance").status_code == 401
