from django.apps import AppConfig

class VendasConfig(AppConfig):
    # Caminho Python completo do módulo
    name = 'velaroma.vendas'

    # Rótulo curto usado nas migrações e em apps.get_model('vendas', ...)
    label = 'vendas'

    verbose_name = 'Vendas e Pedidos'

    default_auto_field = 'django.db.models.BigAutoField'
