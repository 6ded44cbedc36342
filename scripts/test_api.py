# =============================================================================
# scripts/test_api.py — Quick API smoke test (run with backend on 127.0.0.1:8000)
# =============================================================================
# Usage: python scripts/test_api.py
# =============================================================================

import os
import sys

import requests

BASE = os.environ.get("BASE_URL", "http://127.0.0.1:8000")
TIMEOUT = 5
SAMPLE_NOTES = "AP09 AB 1234 Ramesh Swift. engine oil 1 x 2500, oilfltr 1 x 350, r&r Fr bumper 800"


def get(path: str, timeout: float = TIMEOUT) -> dict | list | None:
    try:
        r = requests.get(f"{BASE}{path}", timeout=timeout)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        print(f"GET {path} failed: {e}")
        return None


def post(path: str, json: dict) -> tuple[dict | None, int | None]:
    try:
        r = requests.post(f"{BASE}{path}", json=json, timeout=120)
        r.raise_for_status()
        return r.json(), r.status_code
    except requests.HTTPError as e:
        code = e.response.status_code if e.response is not None else None
        print(f"POST {path} failed: {e} (status={code})")
        if e.response is not None:
            print("Response:", e.response.text[:500])
        return None, code
    except requests.RequestException as e:
        print(f"POST {path} failed: {e}")
        return None, None


def main() -> int:
    print("1. GET /health ...")
    h = get("/health")
    if not h:
        print("   Backend not reachable. Start with: uvicorn servicebill.main:app --host 127.0.0.1 --port 8000")
        return 1
    print("   OK:", h.get("status"), "| providers:", h.get("providers"))

    print("2. GET /models ...")
    m = get("/models")
    if m is None:
        return 1
    print("   OK:", [f"{c['provider']}/{c['model']}" for c in m])

    print("3. POST /parse/invoice ...")
    out, status = post("/parse/invoice", {"text": SAMPLE_NOTES})
    if out:
        print("   OK: model =", f"{out.get('provider')}/{out.get('model')}")
        print("   items:", [i.get("description") for i in out["details"].get("items", [])])
    elif status == 502:
        print("   OK: 502 when every model failed (check API keys and quotas).")
    else:
        return 1

    print("All checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
