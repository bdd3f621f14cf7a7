from services.cart_service.cart_store import CartStore
from services.cart_service.storage_factory import create_storage

storage = create_storage()
cart_store = CartStore(storage=storage)
