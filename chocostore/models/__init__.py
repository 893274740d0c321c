from chocostore.models.admin_user import AdminUser
from chocostore.models.category import Category
from chocostore.models.product import Product
from chocostore.models.product_size import ProductSize
from chocostore.models.delivery_state import DeliveryState
from chocostore.models.order import Order
from chocostore.models.order_item import OrderItem
from chocostore.models.gallery import GalleryItem
from chocostore.models.review import Review

# add ALL models here
