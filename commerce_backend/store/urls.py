# store/urls.py

from rest_framework.routers import SimpleRouter

from store.views.store import StoreViewSet

router = SimpleRouter()
router.register("stores", StoreViewSet, basename="store")

urlpatterns = router.urls
