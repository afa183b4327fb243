"""
Quick smoke check against a running setting store API.
Run with: uv run python smoke_settings_api.py
"""

import json
import requests

BASE_URL = "http://localhost:5000"

payload = {
    "name": "smoke_check",
    "group": "smoke",
    "value": {"enabled": True, "threshold": 3},
    "default_value": {"enabled": False, "threshold": 1},
    "definition": {"type": "json"},
    "sort_order": 10,
    "autoload": False,
}


def run_settings_smoke_check():
    """Create, read, update and delete one setting."""
    print("=" * 80)
    print("Setting store smoke check")
    print("=" * 80)
    print()

    try:
        response = requests.post(f"{BASE_URL}/api/settings", json=payload, timeout=10)
        print(f"📥 Create status: {response.status_code}")
        if response.status_code not in (201, 400):
            print(f"❌ ERROR - {response.json().get('error')}")
            return False

        response = requests.put(
            f"{BASE_URL}/api/settings/{payload['name']}",
            json={"value": {"enabled": True, "threshold": 5}, "group": "smoke"},
            timeout=10,
        )
        print(f"📥 Update status: {response.status_code}")
        print(json.dumps(response.json(), indent=2))

        response = requests.get(f"{BASE_URL}/api/settings", timeout=10)
        print("📄 All settings:")
        print(json.dumps(response.json(), indent=2))

        response = requests.delete(
            f"{BASE_URL}/api/settings/{payload['name']}",
            params={"group": "smoke"},
            timeout=10,
        )
        print(f"📥 Delete status: {response.status_code}")
        return response.status_code == 200

    except requests.exceptions.ConnectionError:
        print("❌ ERROR - Could not connect to server")
        print(f"   Make sure Flask is running at {BASE_URL}")
        print("   Run: uv run flask --app settingstore.main:app run --debug")
        return False


if __name__ == "__main__":
    success = run_settings_smoke_check()
    exit(0 if success else 1)
