# Configuração da interface administrativa do Django para os modelos da Vela Aroma.

from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db import transaction
from django.utils import timezone

from velaroma.catalog.models import Banner, Essencia, Produto
from velaroma.core.dependency_injection import get_gerenciar_pedidos_admin_use_case, get_usuario_atual
from velaroma.core.exceptions import BaseErroCore
from velaroma.infrastructure.models import Usuario
from velaroma.vendas.models import ItemPedido, Pedido

from .forms import PedidoAdminForm, UsuarioChangeForm, UsuarioCreationForm

# ====================================================================
# 1. ADMIN PERSONALIZADO PARA USUÁRIOS
# ====================================================================

@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Customização do modelo Usuario: login por e-mail e papel (user/admin)."""
    form = UsuarioChangeForm
    add_form = UsuarioCreationForm

    list_display = ('email', 'first_name', 'last_name', 'papel', 'is_staff', 'is_active')
    list_filter = ('papel', 'is_staff', 'is_active')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Informações de Perfil', {'fields': ('first_name', 'last_name', 'telefone')}),
        ('Permissões', {'fields': ('papel', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'papel', 'password1', 'password2'),
        }),
    )

    # O campo 'username' não existe no modelo Usuario
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('email',)


# ====================================================================
# 2. ADMIN PARA O CATÁLOGO
# ====================================================================

class DesativarAoExcluirMixin:
    """Excluir pelo admin (tela de exclusão ou ação em massa) apenas desativa o registro."""

    def delete_model(self, request, obj):
        obj.ativo = False
        obj.save(update_fields=['ativo', 'atualizado_em'])

    def delete_queryset(self, request, queryset):
        queryset.update(ativo=False, atualizado_em=timezone.now())


@admin.register(Essencia)
class EssenciaAdmin(DesativarAoExcluirMixin, admin.ModelAdmin):
    list_display = ('nome', 'ativo', 'atualizado_em')
    list_filter = ('ativo',)
    search_fields = ('nome',)


@admin.register(Produto)
class ProdutoAdmin(DesativarAoExcluirMixin, admin.ModelAdmin):
    list_display = ('nome', 'preco', 'ativo', 'criado_em')
    list_filter = ('ativo', 'essencias')
    search_fields = ('nome', 'descricao', 'id')
    filter_horizontal = ('essencias',)
    ordering = ('nome',)
    fieldsets = (
        ('Informações Básicas', {
            'fields': ('nome', 'descricao', 'preco', 'imagem_url', 'ativo')
        }),
        ('Aromas', {
            'fields': ('essencias',),
        }),
    )


@admin.register(Banner)
class BannerAdmin(DesativarAoExcluirMixin, admin.ModelAdmin):
    list_display = ('titulo', 'ordem_exibicao', 'ativo')
    list_editable = ('ordem_exibicao', 'ativo')
    list_filter = ('ativo',)


# ====================================================================
# 3. ADMIN PARA PEDIDOS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Exibe os itens comprados dentro do detalhe do Pedido."""
    model = ItemPedido
    fields = ('nome_produto', 'preco_unitario', 'quantidade', 'subtotal')
    readonly_fields = fields
    extra = 0
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    form = PedidoAdminForm
    list_display = ('numero', 'nome_cliente', 'email_cliente', 'criado_em', 'valor_total', 'status', 'status_pagamento')
    list_filter = ('status', 'status_pagamento', 'criado_em')
    search_fields = ('numero', 'nome_cliente', 'email_cliente', 'endereco_cidade')
    date_hierarchy = 'criado_em'
    inlines = [ItemPedidoInline]

    # Snapshot do checkout: nada disso muda depois da criação
    readonly_fields = (
        'numero',
        'criado_em',
        'atualizado_em',
        'nome_cliente',
        'email_cliente',
        'telefone_cliente',
        'endereco_rua',
        'endereco_numero',
        'endereco_complemento',
        'endereco_cidade',
        'endereco_estado',
        'endereco_cep',
        'valor_frete',
        'valor_total',
    )

    def save_model(self, request, obj, form, change):
        """
        As transições, já checadas pelo PedidoAdminForm, passam pelo
        GerenciarPedidosAdminUseCase. Os campos livres só são gravados se
        todas as transições forem aceitas.
        """
        use_case = get_gerenciar_pedidos_admin_use_case()
        usuario = get_usuario_atual(request)
        try:
            with transaction.atomic():
                if 'status' in form.changed_data:
                    use_case.atualizar_status(
                        usuario, obj.pk, form.cleaned_data['status'], codigo_rastreio=obj.codigo_rastreio
                    )
                if 'status_pagamento' in form.changed_data:
                    use_case.atualizar_status_pagamento(usuario, obj.pk, form.cleaned_data['status_pagamento'])
                obj.save(update_fields=['codigo_rastreio', 'observacoes', 'atualizado_em'])
        except BaseErroCore as e:
            # Ex.: outra alteração mudou o status entre a validação e a gravação
            request._pedido_nao_salvo = True
            messages.error(request, str(e))

    def message_user(self, request, message, level=messages.INFO, *args, **kwargs):
        if level == messages.SUCCESS and getattr(request, '_pedido_nao_salvo', False):
            return
        super().message_user(request, message, level, *args, **kwargs)

    def has_add_permission(self, request):
        """Impedir a criação de pedidos pela interface do Admin."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Pedidos nunca são excluídos; o fim do ciclo é 'cancelled'."""
        return False
