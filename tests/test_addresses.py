def address(city="Pune", state="MH", pin_code="411001", details="12 MG Road"):
    return {"address_details": details, "city": city, "state": state, "pin_code": pin_code}


def test_add_and_list_addresses(client, make_customer):
    customer = make_customer()
    r = client.post(f"/api/customers/{customer['id']}/addresses", json=address())
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Address added"
    assert body["data"]["customer_id"] == customer["id"]
    assert body["data"]["pin_code"] == "411001"

    client.post(f"/api/customers/{customer['id']}/addresses", json=address(city="Mumbai"))
    r = client.get(f"/api/customers/{customer['id']}/addresses")
    assert r.status_code == 200
    assert [a["city"] for a in r.json()["data"]] == ["Pune", "Mumbai"]


def test_add_address_requires_all_fields(client, make_customer):
    customer = make_customer()
    r = client.post(f"/api/customers/{customer['id']}/addresses", json={"address_details": "x", "city": " "})
    assert r.status_code == 400
    fields = {error["field"] for error in r.json()["errors"]}
    assert fields == {"city", "state", "pin_code"}


def test_add_address_unknown_customer(client):
    r = client.post("/api/customers/999/addresses", json=address())
    assert r.status_code == 404
    assert r.json()["message"] == "Customer not found"
    assert client.get("/api/customers/999/addresses").status_code == 404


def test_update_address_partial(client, make_customer):
    customer = make_customer(address=address())
    address_id = client.get(f"/api/customers/{customer['id']}").json()["data"]["addresses"][0]["id"]

    r = client.put(f"/api/addresses/{address_id}", json={"city": "Nashik", "customer_id": 12345})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["city"] == "Nashik"
    assert data["state"] == "MH"
    assert data["customer_id"] == customer["id"]


def test_update_address_no_fields(client, make_customer):
    customer = make_customer(address=address())
    address_id = client.get(f"/api/customers/{customer['id']}").json()["data"]["addresses"][0]["id"]
    r = client.put(f"/api/addresses/{address_id}", json={})
    assert r.status_code == 400
    assert r.json()["message"] == "No fields to update"

    r = client.put(f"/api/addresses/{address_id}", json={"state": ""})
    assert r.status_code == 400


def test_update_missing_address(client):
    r = client.put("/api/addresses/999", json={"city": "Goa"})
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Address not found"}


def test_delete_address(client, make_customer):
    customer = make_customer(address=address())
    address_id = client.get(f"/api/customers/{customer['id']}").json()["data"]["addresses"][0]["id"]

    r = client.delete(f"/api/addresses/{address_id}")
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert client.get(f"/api/customers/{customer['id']}/addresses").json()["data"] == []
    assert client.delete(f"/api/addresses/{address_id}").status_code == 404


def test_out_of_range_address_id_is_not_found(client):
    huge = "99999999999999999999"
    assert client.delete(f"/api/addresses/{huge}").status_code == 404
    r = client.put(f"/api/addresses/{huge}", json={"city": "Goa"})
    assert r.status_code == 404
    assert r.json()["message"] == "Address not found"
    assert client.post(f"/api/customers/{huge}/addresses", json=address()).status_code == 404
