# orders/urls/customer.py

from rest_framework.routers import SimpleRouter

from orders.views import CustomerOrderViewSet

router = SimpleRouter()
router.register(r"", CustomerOrderViewSet, basename="customer-order")

urlpatterns = router.urls
