"""
Drive a running registry through a short arrival/departure scenario.
Usage: python scripts/test/simulate_traffic.py [base_url]
"""

import sys
import requests

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8080/api/v1"
API_KEY = None   # Set if the backend has API_KEY configured


def call(method, path, **kwargs):
    headers = {"X-API-Key": API_KEY} if API_KEY else {}
    resp = requests.request(method, f"{BASE_URL}{path}", headers=headers, timeout=5, **kwargs)
    body = resp.json() if resp.content else None
    print(f"{method:6} {path:24} → {resp.status_code} {body}")
    return resp


def main():
    print(f"🚗 Simulating arrivals against {BASE_URL}")
    created = call("POST", "/vehicles", json={"plate": "AAA111", "vehicle_type": "CAR", "owner_name": "Ana"})
    call("POST", "/vehicles", json={"plate": "AAA111", "vehicle_type": "CAR"})           # placaexist
    call("POST", "/vehicles", json={"id": 99, "plate": "ZZZ999", "vehicle_type": "CAR"}) # idexists
    call("POST", "/vehicles", json={"plate": "MOTO01", "vehicle_type": "MOTORCYCLE"})
    call("GET", "/vehicles/capacity")
    call("GET", "/vehicles")

    if created.status_code == 201:
        vehicle_id = created.json()["id"]
        call("DELETE", f"/vehicles/{vehicle_id}")
        call("GET", f"/vehicles/{vehicle_id}")                                           # 404


if __name__ == "__main__":
    main()
