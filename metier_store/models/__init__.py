from metier_store.models.category import Category
from metier_store.models.product import Product
from metier_store.models.cart import CartItem
from metier_store.models.order import Order
from metier_store.models.order_item import OrderItem

# add ALL models here
