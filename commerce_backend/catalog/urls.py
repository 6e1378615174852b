# catalog/urls.py

from rest_framework.routers import SimpleRouter

from catalog.views import (
    AttributeValueViewSet,
    AttributeViewSet,
    BrandViewSet,
    CategoryViewSet,
    InventoryViewSet,
    ProductVariantViewSet,
    ProductViewSet,
    TagViewSet,
)

router = SimpleRouter()
router.register("brands", BrandViewSet, basename="brand")
router.register("categories", CategoryViewSet, basename="category")
router.register("tags", TagViewSet, basename="tag")
router.register("attributes", AttributeViewSet, basename="attribute")
router.register("attribute-values", AttributeValueViewSet, basename="attribute-value")
router.register("products", ProductViewSet, basename="product")
router.register("variants", ProductVariantViewSet, basename="variant")
router.register("inventory", InventoryViewSet, basename="inventory")

urlpatterns = router.urls
