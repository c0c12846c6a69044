"""
Quick API smoke test against a running service
"""

import httpx
import asyncio


async def run_smoke_test():
    """Hit each endpoint of a running TruthSense service"""

    base_url = "http://localhost:8001"

    print("Testing TruthSense API...")
    print("=" * 50)

    async with httpx.AsyncClient(timeout=30.0) as client:
        print("\n1. Health check...")
        response = await client.get(f"{base_url}/health")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")

        print("\n2. Metrics...")
        response = await client.get(f"{base_url}/metrics")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")

        print("\n3. Classify endpoint...")
        response = await client.post(
            f"{base_url}/classify",
            json={
                "headline": "Scientists confirm drinking coffee makes you immortal, study claims",
                "debug": True
            }
        )
        print(f"Status: {response.status_code}")
        data = response.json()
        print(f"Label: {data.get('label')} ({data.get('confidence')}%)")
        print(f"Explanation: {data.get('explanation')}")

        print("\n4. Batch endpoint...")
        response = await client.post(
            f"{base_url}/classify/batch",
            json={
                "headlines": [
                    "BREAKING: New miracle drink discovered!!!",
                    "Researchers at the University of Oxford publish new findings on sleep patterns"
                ]
            }
        )
        print(f"Status: {response.status_code}")
        for result in response.json().get("results", []):
            print(f"  {result['label']} ({result['confidence']}%)")

    print("\n" + "=" * 50)
    print("Test completed")


if __name__ == "__main__":
    asyncio.run(run_smoke_test())
