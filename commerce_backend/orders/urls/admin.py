# orders/urls/admin.py

from rest_framework.routers import SimpleRouter

from orders.views import OrderAdminViewSet

router = SimpleRouter()
router.register(r"", OrderAdminViewSet, basename="admin-order")

urlpatterns = router.urls
