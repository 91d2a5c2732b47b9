"""In-memory aggregates over a window of recent orders."""

from collections import Counter
from datetime import datetime, timedelta
from nestsweets.models.order import ORDER_STATUSES


def summarize_orders(orders, today=None, top_n=5):
    """Totals, per-status counts, last-7-days series and top products.

    Revenue excludes cancelled orders.
    """
    today = today or datetime.utcnow().date()
    live = [o for o in orders if (o.status or 'pending') != 'cancelled']
    revenue = sum(o.total or 0 for o in live)

    status_counts = {status: 0 for status in ORDER_STATUSES}
    for order in orders:
        status = order.status or 'pending'
        status_counts[status] = status_counts.get(status, 0) + 1

    payment_methods = Counter((o.payment_method or 'cod') for o in orders)

    days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
    daily = {day: {'date': day, 'orders': 0, 'revenue': 0.0} for day in days}
    for order in orders:
        if not order.created_at:
            continue
        day = order.created_at.date()
        if day in daily:
            daily[day]['orders'] += 1
            if (order.status or 'pending') != 'cancelled':
                daily[day]['revenue'] += order.total or 0

    product_quantities = Counter()
    product_revenue = Counter()
    for order in live:
        for item in order.items:
            product_quantities[item.cake_name] += item.quantity
            product_revenue[item.cake_name] += item.total_price or 0

    top_products = [
        {'name': name, 'quantity': quantity, 'revenue': product_revenue[name]}
        for name, quantity in product_quantities.most_common(top_n)
    ]

    return {
        'total_orders': len(orders),
        'total_revenue': revenue,
        'average_order_value': revenue / len(live) if live else 0.0,
        'status_counts': status_counts,
        'payment_methods': dict(payment_methods),
        'last_7_days': [daily[day] for day in days],
        'last_7_days_orders': sum(d['orders'] for d in daily.values()),
        'last_7_days_revenue': sum(d['revenue'] for d in daily.values()),
        'top_products': top_products,
        'pending_payments': sum(1 for o in live if (o.payment_status or 'pending') == 'pending'),
    }
