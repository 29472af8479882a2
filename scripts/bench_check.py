#!/usr/bin/env python3
"""Benchmark permission checks: latency (p50, p95, p99) and QPS.

Seeds one organization with --num-roles roles, assigns all of them to one
user, then times GET /api/v1/permissions/check.

Usage:
  export API_URL=http://localhost:8000
  # Optional, only when the service validates tokens:
  export KEYCLOAK_URL=... KEYCLOAK_CLIENT_SECRET=... BENCH_USER=... BENCH_PASSWORD=...
  python scripts/bench_check.py [--num-roles 20] [--perms-per-role 10] [--num-checks 500]
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time
import uuid

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def _percentile(sorted_values: list[float], q: float) -> float:
    idx = max(int(len(sorted_values) * q) - 1, 0)
    return sorted_values[idx]


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark permission checks")
    parser.add_argument("--num-roles", type=int, default=20, help="Roles assigned to the user")
    parser.add_argument("--perms-per-role", type=int, default=10, help="Permissions per role")
    parser.add_argument("--num-checks", type=int, default=500, help="Number of check requests")
    parser.add_argument("--output", type=str, default="/results/bench_check.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    headers = {"Content-Type": "application/json"}
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "")
    if client_secret:
        print("Getting token...")
        token = get_token(
            os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
            os.environ.get("KEYCLOAK_REALM", "platform"),
            os.environ.get("KEYCLOAK_CLIENT_ID", "access-control"),
            client_secret,
            os.environ.get("BENCH_USER", "testuser"),
            os.environ.get("BENCH_PASSWORD", "testpass"),
        )
        headers["Authorization"] = f"Bearer {token}"

    org_id = str(uuid.uuid4())
    user_id = str(uuid.uuid4())
    admin_id = str(uuid.uuid4())

    print(f"Seeding {args.num_roles} roles x {args.perms_per_role} permissions...")
    with httpx.Client(base_url=api_url, headers=headers, timeout=30.0) as client:
        for i in range(args.num_roles):
            r = client.post(
                "/api/v1/roles",
                json={
                    "name": f"bench-role-{i}",
                    "scopeId": org_id,
                    "scopeType": "Organization",
                    "permissions": [f"bench.p{i}_{j}" for j in range(args.perms_per_role)],
                },
            )
            r.raise_for_status()
            client.post(
                f"/api/v1/roles/{r.json()['id']}/assignments",
                json={
                    "userId": user_id,
                    "scopeId": org_id,
                    "scopeType": "Organization",
                    "assignedBy": admin_id,
                },
            ).raise_for_status()

    latencies: list[float] = []
    errors = 0
    granted = 0
    print(f"Running {args.num_checks} permission checks...")
    start_total = time.perf_counter()
    with httpx.Client(base_url=api_url, headers=headers, timeout=30.0) as client:
        for k in range(args.num_checks):
            # Alternate between a granted action and one nobody holds
            action = f"bench.p{k % args.num_roles}_0" if k % 2 == 0 else "bench.missing"
            t0 = time.perf_counter()
            r = client.get(
                "/api/v1/permissions/check",
                params={"userId": user_id, "scopeId": org_id, "permission": action},
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
                granted += bool(r.json()["hasPermission"])
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful checks.")
        return 1

    ordered = sorted(latencies)
    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = _percentile(ordered, 0.95) * 1000
    p99 = _percentile(ordered, 0.99) * 1000

    summary = (
        f"Permission check benchmark (roles={args.num_roles}, "
        f"perms/role={args.perms_per_role}, checks={n}, granted={granted}, errors={errors})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
