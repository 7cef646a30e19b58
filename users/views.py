# users/views.py - Profile API

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.contrib.auth import get_user_model

from .serializers import UserSerializer, PublicUserSerializer, UpdateProfileSerializer

User = get_user_model()


class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Student directory + the caller's own profile.

    List and detail expose public fields only; ``me`` returns everything.
    """
    queryset = User.objects.filter(is_active=True).order_by('name', 'username')
    serializer_class = PublicUserSerializer
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        GET /api/users/me/
        Return current user info
        """
        return Response(UserSerializer(request.user).data)

    @action(detail=False, methods=['post', 'patch'], url_path='profile')
    def profile(self, request):
        """
        POST /api/users/profile/
        Body: any subset of the profile fields

        Saving the profile once marks it complete.
        """
        serializer = UpdateProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)

    @action(detail=False, methods=['get'], url_path=r'username/(?P<username>[^/]+)')
    def username_available(self, request, username=None):
        """
        GET /api/users/username/{username}/
        Returns {"available": bool}
        """
        taken = User.objects.filter(username__iexact=username).exclude(pk=request.user.pk).exists()
        return Response({'available': not taken})

    @action(detail=False, methods=['get'], url_path='institution/students')
    def institution_students(self, request):
        """
        GET /api/users/institution/students/
        Students sharing the institution account's email domain.
        """
        user = request.user
        if not user.is_institution:
            raise PermissionDenied("Only institution accounts can list students.")

        domain = user.domain
        students = (
            User.objects.filter(role=User.ROLE_STUDENT, is_active=True, email__iendswith=f"@{domain}")
            .order_by('name', 'username')
        )
        return Response(
            PublicUserSerializer(students, many=True).data,
            status=status.HTTP_200_OK,
        )
