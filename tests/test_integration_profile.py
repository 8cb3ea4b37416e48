"""
Customer profile endpoints: page, JSON update, completion check and image upload.
"""
import io

import pytest


@pytest.fixture
def customer(client, make_user, login):
    user = make_user(email="cust@example.com", role="Customer", first_name="Rina", last_name="Das")
    login("cust@example.com")
    return user


def test_profile_page_renders(client, customer):
    r = client.get("/Home/Profile")
    assert r.status_code == 200
    assert "Rina Das" in r.get_data(as_text=True)


def test_completion_for_contact_details_only(client, customer):
    body = client.get("/Home/CheckProfileCompletion").get_json()
    assert body["success"] is True
    assert body["isDrivingInfoComplete"] is False
    assert body["isDocumentsComplete"] is False
    assert body["isProfileComplete"] is False
    assert body["message"].startswith("Please complete your profile")


def test_update_profile_completes_it_and_refreshes_session_name(client, customer):
    r = client.post("/Home/UpdateProfile", json={
        "firstName": "Rina", "lastName": "Hossain", "phoneNumber": "01800000000",
        "address": "Chattogram", "licenseNumber": "DL-123", "drivingExperienceYears": 4,
        "carNumber": "DHA-GA-11", "drivingLicenseImageUrl": "/uploads/profiles/dl.png",
        "nidImageUrl": "/uploads/profiles/nid.png", "preferredCarType": "Private Car",
    })
    assert r.get_json() == {"success": True, "message": "Profile updated successfully!"}

    with client.session_transaction() as sess:
        assert sess["user_name"] == "Rina Hossain"

    body = client.get("/Home/CheckProfileCompletion").get_json()
    assert body["isProfileComplete"] is True
    assert body["message"] == "Profile is complete. You can proceed with car rental."


def test_update_profile_validation_error(client, customer):
    r = client.post("/Home/UpdateProfile", json={
        "firstName": "", "lastName": "Das", "phoneNumber": "0170", "drivingExperienceYears": 150,
    })
    body = r.get_json()
    assert body["success"] is False


def test_profile_endpoints_require_customer(client, make_user, login):
    make_user(email="mgr@example.com", role="Manager")
    login("mgr@example.com")
    assert client.get("/Home/Profile").status_code == 302
    r = client.post("/Home/UpdateProfile", json={"firstName": "X"})
    assert r.status_code == 401
    assert r.get_json()["success"] is False


def test_upload_profile_image_names_file_after_user(client, customer):
    r = client.post("/Home/UploadProfileImage",
                    data={"file": (io.BytesIO(b"\xff\xd8jpeg"), "me.jpg")},
                    content_type="multipart/form-data")
    body = r.get_json()
    assert body["success"] is True
    assert body["url"].startswith(f"/uploads/profiles/profile_{customer.id}_")


def test_upload_profile_image_requires_login(client):
    r = client.post("/Home/UploadProfileImage",
                    data={"file": (io.BytesIO(b"x"), "me.jpg")},
                    content_type="multipart/form-data")
    assert r.status_code == 401
    assert r.get_json() == {"success": False, "message": "User not authenticated"}
