from rest_framework.permissions import IsAdminUser


class IsAdministrador(IsAdminUser):
    """
    Permite o acesso a usuários com papel 'admin' (ou staff).
    A mesma regra é aplicada de novo nos Use Cases administrativos.
    """

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_admin', user.is_staff))
