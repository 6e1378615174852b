# coupons/urls.py

from rest_framework.routers import SimpleRouter

from coupons.views.coupon import CouponViewSet

router = SimpleRouter()
router.register("coupons", CouponViewSet, basename="coupon")

urlpatterns = router.urls
