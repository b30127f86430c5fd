import pytest


def address(city="Pune", state="MH", pin_code="411001", details="12 MG Road"):
    return {"address_details": details, "city": city, "state": state, "pin_code": pin_code}


@pytest.fixture()
def seeded(client, make_customer):
    people = [
        ("Asha", "Rao", "9000000001", address(city="Pune", state="MH", pin_code="411001")),
        ("Ravi", "Kumar", "9000000002", address(city="Delhi", state="DL", pin_code="110001")),
        ("Meera", "Iyer", "9000000003", address(city="Pune", state="MH", pin_code="411002")),
        ("John", "Doe", "9000000004", None),
        ("Anil", "Zutshi", "9000000005", address(city="Pune", state="MH", pin_code="411001")),
        ("Priya", "Bose", "9000000006", address(city="Mumbai", state="MH", pin_code="400001")),
        ("Kiran", "Shah", "9000000007", address(city="Pune", state="MH", pin_code="411003")),
    ]
    created = [
        make_customer(first_name=first, last_name=last, phone_number=phone, address=addr)
        for first, last, phone, addr in people
    ]
    # second address for Ravi so state and city filters can match different rows
    client.post(f"/api/customers/{created[1]['id']}/addresses", json=address(city="Nagpur", state="MH", pin_code="440001"))
    return created


def test_default_listing(client, seeded):
    r = client.get("/api/customers")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["meta"] == {"page": 1, "limit": 10, "total": 7}
    assert [c["id"] for c in body["data"]] == sorted(c["id"] for c in seeded)


def test_total_independent_of_page(client, seeded):
    for page in ("1", "2", "3"):
        body = client.get("/api/customers", params={"page": page, "limit": "3"}).json()
        assert body["meta"]["total"] == 7
        assert len(body["data"]) <= 3
    last = client.get("/api/customers", params={"page": "3", "limit": "3"}).json()
    assert len(last["data"]) == 1


def test_page_beyond_end_is_empty(client, seeded):
    body = client.get("/api/customers", params={"page": "50"}).json()
    assert body["data"] == []
    assert body["meta"] == {"page": 50, "limit": 10, "total": 7}


def test_invalid_paging_values_fall_back(client, seeded):
    body = client.get("/api/customers", params={"page": "abc", "limit": "-4"}).json()
    assert body["meta"] == {"page": 1, "limit": 10, "total": 7}

    body = client.get("/api/customers", params={"limit": "100000"}).json()
    assert body["meta"]["limit"] == 100


def test_search_name_and_phone(client, seeded):
    body = client.get("/api/customers", params={"search": "meera iy"}).json()
    assert [c["first_name"] for c in body["data"]] == ["Meera"]

    body = client.get("/api/customers", params={"search": "0000004"}).json()
    assert [c["first_name"] for c in body["data"]] == ["John"]

    body = client.get("/api/customers", params={"search": "%"}).json()
    assert body["meta"]["total"] == 0


def test_city_filter_with_sort_and_paging(client, seeded):
    body = client.get("/api/customers", params={"city": "Pune", "sort": "last_name:desc", "page": "1", "limit": "2"}).json()
    assert body["meta"]["total"] == 4
    assert [c["last_name"] for c in body["data"]] == ["Zutshi", "Shah"]

    body = client.get("/api/customers", params={"city": "Pune", "sort": "last_name:desc", "page": "2", "limit": "2"}).json()
    assert [c["last_name"] for c in body["data"]] == ["Rao", "Iyer"]


def test_location_filters_are_independent(client, seeded):
    body = client.get("/api/customers", params={"city": "Delhi", "state": "MH"}).json()
    assert [c["first_name"] for c in body["data"]] == ["Ravi"]

    body = client.get("/api/customers", params={"pin_code": "411001"}).json()
    assert {c["first_name"] for c in body["data"]} == {"Asha", "Anil"}

    body = client.get("/api/customers", params={"city": "pune"}).json()
    assert body["meta"]["total"] == 0


def test_sort_phone_desc(client, seeded):
    phones = [c["phone_number"] for c in client.get("/api/customers", params={"sort": "phone_number:desc"}).json()["data"]]
    assert phones == sorted(phones, reverse=True)


def test_unknown_sort_falls_back_to_id(client, seeded):
    body = client.get("/api/customers", params={"sort": "password:sideways"}).json()
    ids = [c["id"] for c in body["data"]]
    assert ids == sorted(ids)


def test_empty_store(client):
    body = client.get("/api/customers").json()
    assert body == {"success": True, "data": [], "meta": {"page": 1, "limit": 10, "total": 0}}


def test_huge_page_is_empty_not_an_error(client, make_customer):
    make_customer()
    r = client.get("/api/customers", params={"page": "99999999999999999999"})
    assert r.status_code == 200
    body = r.json()
    assert body["data"] == []
    assert body["meta"]["total"] == 1

    r = client.get("/api/customers", params={"page": "9" * 5000, "limit": "1"})
    assert r.status_code == 200
    assert r.json()["data"] == []
