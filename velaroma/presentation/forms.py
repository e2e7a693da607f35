# velaroma/presentation/forms.py

from django import forms
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from velaroma.core.exceptions import TransicaoInvalidaError
from velaroma.core.status import validar_transicao, validar_transicao_pagamento
from velaroma.infrastructure.models import Usuario
from velaroma.vendas.models import Pedido

# --- FORMULÁRIOS DO ADMIN DE USUÁRIOS ---
# O modelo Usuario não tem 'username': os formulários padrão do Django
# precisam apontar para o e-mail.

class UsuarioCreationForm(UserCreationForm):
    """Formulário de criação de usuário (admin) usando o e-mail como login."""

    class Meta:
        model = Usuario
        fields = ('email', 'papel')


class UsuarioChangeForm(UserChangeForm):

    class Meta:
        model = Usuario
        fields = ('email', 'first_name', 'last_name', 'telefone', 'papel')


# --- FORMULÁRIO DO ADMIN DE PEDIDOS ---

class PedidoAdminForm(forms.ModelForm):
    """
    Campos editáveis de um pedido no admin. As mudanças de status são checadas
    na máquina de status ainda na validação do formulário: uma transição
    recusada volta com erro e nenhum campo do pedido é gravado.
    """

    VALIDADORES = (
        ('status', validar_transicao),
        ('status_pagamento', validar_transicao_pagamento),
    )

    class Meta:
        model = Pedido
        fields = ('status', 'status_pagamento', 'codigo_rastreio', 'observacoes')

    def clean(self):
        cleaned_data = super().clean()
        for campo, validar in self.VALIDADORES:
            if campo not in self.changed_data or campo not in cleaned_data:
                continue
            try:
                validar(self.initial.get(campo), cleaned_data[campo])
            except TransicaoInvalidaError as e:
                self.add_error(campo, e.message)
        return cleaned_data
