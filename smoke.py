#!/usr/bin/env python3
"""
Smoke script for a running Registration Relay (not part of the pytest suite).

Usage: python smoke.py [base_url]
"""

import sys
import time
import requests

def check_health(base_url):
    """Check the health endpoint."""
    try:
        response = requests.get(f"{base_url}/health", timeout=10)
        if response.status_code == 200:
            print(f"✅ Health check passed: {response.json()}")
            return True
        print(f"❌ Health check failed: {response.status_code}")
        return False
    except requests.exceptions.RequestException as e:
        print(f"❌ Health check error: {e}")
        return False

def check_preflight(base_url):
    """Check the CORS pre-flight answer."""
    try:
        response = requests.options(f"{base_url}/submit-registro", timeout=10)
        allowed = response.headers.get("Access-Control-Allow-Methods")
        if response.status_code == 200 and allowed == "POST, OPTIONS":
            print("✅ Pre-flight passed")
            return True
        print(f"❌ Pre-flight failed: {response.status_code} {allowed}")
        return False
    except requests.exceptions.RequestException as e:
        print(f"❌ Pre-flight error: {e}")
        return False

def check_rejects_bad_email(base_url):
    """Check that an invalid email is rejected without reaching the upstream."""
    try:
        response = requests.post(
            f"{base_url}/submit-registro",
            json={"nombre": "Smoke", "email": "not-an-email", "whatsapp": "000"},
            timeout=10
        )
        if response.status_code == 400:
            print(f"✅ Invalid email rejected: {response.json()}")
            return True
        print(f"❌ Invalid email not rejected: {response.status_code} {response.text}")
        return False
    except requests.exceptions.RequestException as e:
        print(f"❌ Invalid email check error: {e}")
        return False

def check_registration(base_url):
    """Send one real registration through to the configured upstream."""
    sample = {
        "nombre": "Smoke Test",
        "email": f"smoke.{int(time.time())}@example.com",
        "whatsapp": "5550000",
        "producto": "Smoke"
    }
    try:
        response = requests.post(f"{base_url}/submit-registro", json=sample, timeout=30)
        if response.status_code == 200:
            print(f"✅ Registration relayed: {response.json()}")
            return True
        print(f"❌ Registration failed: {response.status_code}")
        print(f"Response: {response.text}")
        return False
    except requests.exceptions.RequestException as e:
        print(f"❌ Registration error: {e}")
        return False

def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
    print(f"🚀 Smoke testing Registration Relay at {base_url}")
    print("=" * 50)
    
    checks = [
        ("Health Check", check_health),
        ("Pre-flight", check_preflight),
        ("Invalid Email", check_rejects_bad_email),
        ("Registration", check_registration)
    ]
    
    passed = 0
    for name, check in checks:
        print(f"\n🧪 Running {name}...")
        if check(base_url):
            passed += 1
    
    print("\n" + "=" * 50)
    print(f"📊 Results: {passed}/{len(checks)} checks passed")
    return 0 if passed == len(checks) else 1

if __name__ == "__main__":
    sys.exit(main())
