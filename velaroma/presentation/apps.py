from django.apps import AppConfig


class PresentationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'velaroma.presentation'
    label = 'presentation'  # API REST, serializers e Django Admin
