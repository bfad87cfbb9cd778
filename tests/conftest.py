import pytest

from datadetective.schema import build_table


@pytest.fixture
def events_table():
    """Small clickstream with sessions, users, purchases and profit fields."""
    rows = [
        {'session_id': 's1', 'user_id': 'u1', 'action': 'view', 'product_name': 'Widget',
         'timestamp': '2024-01-15T14:30:00Z', 'time_spent_sec': 30, 'order_id': '',
         'total_order_value': '', 'cost': '', 'quantity': ''},
        {'session_id': 's1', 'user_id': 'u1', 'action': 'purchase', 'product_name': 'Widget',
         'timestamp': '2024-01-15T14:45:00Z', 'time_spent_sec': 50, 'order_id': 'o1',
         'total_order_value': 100, 'cost': 30, 'quantity': 2},
        {'session_id': 's2', 'user_id': 'unknown', 'action': 'purchase', 'product_name': 'Gadget',
         'timestamp': '2024-01-16T09:00:00Z', 'time_spent_sec': 10, 'order_id': '',
         'total_order_value': 0, 'cost': 5, 'quantity': 1},
    ]
    return build_table(rows, file_size=2048)


@pytest.fixture
def clean_table():
    rows = [
        {'user_id': f'u{i}', 'action': 'view' if i % 3 else 'purchase',
         'timestamp': f'2024-03-{i + 1:02d}T10:00:00', 'time_spent_sec': 10 + i}
        for i in range(12)
    ]
    return build_table(rows)
