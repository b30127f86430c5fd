"""The command line client, driven through the in-process TestClient."""

import json

import pytest

import customer_client
from customer_client import ApiError, CustomerApiClient


@pytest.fixture()
def api(client):
    return CustomerApiClient(base_url="http://testserver", session=client)


def test_client_crud_flow(api):
    assert api.check_health()["message"] == "OK"

    created = api.create_customer("Asha", "Rao", "9876543210", address={
        "address_details": "12 MG Road", "city": "Pune", "state": "MH", "pin_code": "411001",
    })["data"]
    customer_id = created["id"]

    listed = api.list_customers(city="Pune", sort="last_name:desc", page=1, limit=5)
    assert listed["meta"]["total"] == 1

    updated = api.update_customer(customer_id, last_name="Iyer", first_name=None)["data"]
    assert updated["last_name"] == "Iyer"

    added = api.add_address(customer_id, "1 Park St", "Kolkata", "WB", "700016")["data"]
    assert len(api.list_addresses(customer_id)["data"]) == 2

    assert api.update_address(added["id"], city="Howrah")["data"]["city"] == "Howrah"
    assert api.delete_address(added["id"])["success"] is True
    assert api.delete_customer(customer_id)["success"] is True


def test_client_raises_api_error(api):
    api.create_customer("Asha", "Rao", "9876543210")
    with pytest.raises(ApiError) as excinfo:
        api.create_customer("Ravi", "Kumar", "9876543210")
    assert excinfo.value.status_code == 409
    assert "Phone number already exists" in str(excinfo.value)

    with pytest.raises(ApiError) as excinfo:
        api.create_customer("", "Kumar", "1")
    assert excinfo.value.status_code == 400
    assert "first_name" in str(excinfo.value)


def test_command_line(api, monkeypatch, capsys):
    monkeypatch.setattr(customer_client, "CustomerApiClient", lambda url: api)

    assert customer_client.main(["create", "--first-name", "Asha", "--last-name", "Rao", "--phone-number", "9876543210"]) == 0
    created = json.loads(capsys.readouterr().out)
    assert created["data"]["first_name"] == "Asha"

    assert customer_client.main(["list", "--search", "asha"]) == 0
    listed = json.loads(capsys.readouterr().out)
    assert listed["meta"]["total"] == 1

    assert customer_client.main(["get", "999"]) == 1
