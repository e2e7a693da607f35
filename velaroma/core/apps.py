# velaroma/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    name = 'velaroma.core'
    label = 'core'
    verbose_name = 'Camada de Entidades e Lógica (Core)'

    # Esta camada não tem modelos: entidades são dataclasses puras,
    # os modelos do ORM ficam em catalog, vendas e infrastructure.
    default_auto_field = 'django.db.models.BigAutoField'
