from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from common.responses import success_response
from users.serializers.auth import MeSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = MeSerializer

    @extend_schema(
        responses={200: MeSerializer},
        description="Get current authenticated staff profile",
    )
    def get(self, request):
        user = request.user

        return success_response(
            MeSerializer(
                {
                    "id": user.id,
                    "email": user.email,
                    "name": user.name,
                    "phone": user.phone,
                    "role_id": user.role_id,
                    "role_name": user.role_name,
                    "store_id": user.store_id,
                }
            ).data
        )
