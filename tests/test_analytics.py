from datetime import date, datetime
from types import SimpleNamespace

from nestsweets.utils.analytics import summarize_orders
from conftest import login


def order(total, status='pending', created=datetime(2024, 5, 10, 12), method='cod', payment='pending',
          items=()):
    return SimpleNamespace(
        total=total,
        status=status,
        created_at=created,
        payment_method=method,
        payment_status=payment,
        items=[SimpleNamespace(cake_name=name, quantity=qty, total_price=price) for name, qty, price in items]
    )


def test_summary():
    orders = [
        order(1000, 'delivered', payment='paid', items=[('Truffle', 1, 1000)]),
        order(500, items=[('Red Velvet', 1, 500)], created=datetime(2024, 5, 8, 9)),
        order(700, 'cancelled', method='online', items=[('Truffle', 1, 700)]),
        order(300, created=datetime(2024, 4, 1), items=[('Truffle', 1, 300)]),
    ]

    summary = summarize_orders(orders, today=date(2024, 5, 10))

    assert summary['total_orders'] == 4
    assert summary['total_revenue'] == 1800
    assert summary['average_order_value'] == 600
    assert summary['status_counts']['pending'] == 2
    assert summary['status_counts']['cancelled'] == 1
    assert summary['payment_methods'] == {'cod': 3, 'online': 1}
    assert summary['pending_payments'] == 2

    days = summary['last_7_days']
    assert len(days) == 7
    assert days[0]['date'] == date(2024, 5, 4)
    assert days[-1]['date'] == date(2024, 5, 10)
    assert days[-1]['orders'] == 2
    assert days[-1]['revenue'] == 1000
    assert summary['last_7_days_orders'] == 3
    assert summary['last_7_days_revenue'] == 1500

    # cancelled orders do not count towards best sellers
    assert summary['top_products'] == [
        {'name': 'Truffle', 'quantity': 2, 'revenue': 1300},
        {'name': 'Red Velvet', 'quantity': 1, 'revenue': 500},
    ]


def test_empty_summary():
    summary = summarize_orders([], today=date(2024, 5, 10))
    assert summary['total_orders'] == 0
    assert summary['average_order_value'] == 0
    assert summary['top_products'] == []


def test_analytics_page(client, app, users):
    login(client, 'admin@example.com')
    assert client.get('/admin/analytics').status_code == 200
