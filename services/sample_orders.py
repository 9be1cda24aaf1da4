import logging
import time
import uuid
from typing import Any, Dict

import requests

logger = logging.getLogger(__name__)


def build_sample_order() -> Dict[str, Any]:
    return {
        "track_number": "TN123456789",
        "entry": "warehouse",
        "locale": "en_US",
        "internal_signature": "sig12345",
        "customer_id": str(uuid.uuid4()),
        "delivery_service": "DHL",
        "shardkey": "sk123",
        "sm_id": 1,
        "oof_shard": "shard1",
        "delivery": {
            "name": "John Doe",
            "phone": "555-1234",
            "zip": "12345",
            "city": "Sample City",
            "address": "1234 Sample Street",
            "region": "Sample Region",
            "email": "john.doe@example.com",
        },
        "payment": {
            "transaction": "tx12345",
            "request_id": "rq12345",
            "currency": "USD",
            "provider": "Visa",
            "amount": 100,
            "payment_dt": 1637924400,
            "bank": "Sample Bank",
            "delivery_cost": 5,
            "goods_total": 95,
            "custom_fee": 0,
        },
        "items": [
            {
                "chrt_id": 123456789,
                "track_number": "TN123456789",
                "price": 100,
                "rid": "RID12345",
                "name": "Sample Item",
                "sale": 10,
                "size": "M",
                "total_price": 90,
                "nm_id": 987654321,
                "brand": "Sample Brand",
                "status": 1,
            }
        ],
    }


def create_remote_order(session: requests.Session, base_url: str, order: Dict[str, Any]) -> bool:
    try:
        resp = session.post(f"{base_url}/api/orders", json=order, timeout=20)
    except requests.RequestException as e:
        logger.error("Error sending order: %s", e)
        return False

    if resp.ok:
        logger.info("Order created: %s", resp.text)
        return True
    logger.warning("Failed to create order (%s): %s", resp.status_code, resp.text)
    return False


def fill_test_data(port: int, count: int = 1, delay_ms: int = 1000) -> int:
    """Post `count` sample orders to a running service, pausing between requests."""
    base_url = f"http://localhost:{port}"
    created = 0
    with requests.Session() as session:
        for _ in range(count):
            # The first pause also gives the server time to come up
            time.sleep(delay_ms / 1000)
            if create_remote_order(session, base_url, build_sample_order()):
                created += 1

    logger.warning("Created: %d of %d order(s)", created, count)
    return created
