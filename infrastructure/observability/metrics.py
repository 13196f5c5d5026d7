"""
Prometheus Metrics

Business metrics for the marketplace. Exposed at /api/metrics for scraping.
"""

from prometheus_client import Counter, Histogram

orders_created_total = Counter("zade_orders_created_total", "Orders created at checkout")
"""One increment per order row created by checkout."""

checkout_total = Counter("zade_checkout_total", "Checkout attempts", ["status"])
"""Labels: status (initiated/failed)"""

checkout_duration = Histogram(
    "zade_checkout_duration_seconds", "Checkout (order creation + intent) duration", buckets=[0.1, 0.5, 1.0, 2.0, 5.0]
)

payments_total = Counter("zade_payments_total", "Payment outcomes applied", ["purpose", "status"])
"""
Labels:
    purpose: order | credit_purchase
    status: succeeded | failed
"""

credits_purchased_total = Counter("zade_credits_purchased_total", "Credits granted through purchases")

boosts_purchased_total = Counter("zade_boosts_purchased_total", "Boost campaigns purchased", ["entity_type", "plan"])

boosts_expired_total = Counter("zade_boosts_expired_total", "Boost campaigns expired by the sweeper")

notifications_sent_total = Counter("zade_notifications_sent_total", "Notifications created", ["type"])

realtime_push_failures_total = Counter(
    "zade_realtime_push_failures_total", "Websocket pushes that failed", ["channel"]
)

token_validation_total = Counter("zade_token_validation_total", "Hosted access token validations", ["status"])
"""Labels: status (valid/invalid/expired)"""

users_provisioned_total = Counter("zade_users_provisioned_total", "Local user rows created from hosted identities")


def record_payment(purpose: str, succeeded: bool):
    payments_total.labels(purpose=purpose, status="succeeded" if succeeded else "failed").inc()
