from nestsweets.models import Product
from nestsweets.utils.stock import check_stock_availability, decrement_stock, increment_stock


def product(stock):
    return Product(name='Test Cake', base_price=500, stock=stock, in_stock=True)


def test_untracked_stock_is_unlimited():
    cake = product(None)
    assert check_stock_availability(cake, 1000)
    assert decrement_stock(cake, 5) == (True, None, None)
    assert cake.stock is None
    assert increment_stock(cake, 2) is False


def test_missing_product():
    assert decrement_stock(None) == (False, None, None)
    assert not check_stock_availability(None)


def test_decrement_warns_when_low():
    cake = product(30)
    assert decrement_stock(cake, 5) == (True, None, 25)
    assert decrement_stock(cake, 20) == (True, 'low_stock', 5)
    assert cake.in_stock


def test_decrement_to_zero_marks_out_of_stock():
    cake = product(3)
    assert decrement_stock(cake, 5) == (True, 'out_of_stock', 0)
    assert cake.stock == 0
    assert cake.in_stock is False


def test_increment_restores_in_stock():
    cake = product(0)
    cake.in_stock = False
    assert increment_stock(cake, 2)
    assert cake.stock == 2
    assert cake.in_stock


def test_availability():
    cake = product(4)
    assert check_stock_availability(cake, 4)
    assert not check_stock_availability(cake, 5)
