from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'velaroma.infrastructure'
    label = 'infrastructure'  # AUTH_USER_MODEL = 'infrastructure.Usuario'
    verbose_name = 'Usuários e Autenticação'
