from django.db import models
from decimal import Decimal

from velaroma.core.status import StatusPagamento, StatusPedido


class Pedido(models.Model):
    """
    Modelo que representa um pedido de checkout de visitante.
    Os dados do cliente e do endereço são uma cópia do momento da compra.
    """
    numero = models.CharField(max_length=50, unique=True, verbose_name="Número do Pedido")

    # Cliente (snapshot)
    nome_cliente = models.CharField(max_length=255)
    email_cliente = models.EmailField(max_length=320)
    telefone_cliente = models.CharField(max_length=20, blank=True, null=True)

    # Endereço (snapshot)
    endereco_rua = models.CharField(max_length=255)
    endereco_numero = models.CharField(max_length=20)
    endereco_complemento = models.CharField(max_length=255, blank=True, null=True)
    endereco_cidade = models.CharField(max_length=255)
    endereco_estado = models.CharField(max_length=2)
    endereco_cep = models.CharField(max_length=20)

    # Valores
    valor_total = models.DecimalField(max_digits=10, decimal_places=2)
    valor_frete = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(max_length=20, choices=StatusPedido.CHOICES, default=StatusPedido.PENDENTE)
    status_pagamento = models.CharField(
        max_length=20, choices=StatusPagamento.CHOICES, default=StatusPagamento.PENDENTE
    )

    # Rastreamento
    codigo_rastreio = models.CharField(max_length=100, blank=True, null=True, verbose_name="Código de Rastreio")
    observacoes = models.TextField(blank=True, null=True)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        db_table = 'vendas_pedido'
        ordering = ['-criado_em', '-id']

    def __str__(self):
        return f"Pedido {self.numero} - {self.email_cliente}"

    @property
    def total_formatado(self):
        return f"R$ {self.valor_total:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


class ItemPedido(models.Model):
    """
    Modelo que representa um item dentro de um pedido.
    Mantém um snapshot dos dados do produto no momento da compra.
    """
    pedido = models.ForeignKey(Pedido, related_name='itens', on_delete=models.CASCADE)
    # Referência fraca ao produto original
    produto = models.ForeignKey(
        'catalog.Produto',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='itens_venda',
        db_constraint=False,
    )

    # Snapshot dos dados do produto
    nome_produto = models.CharField(max_length=255)
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2)
    quantidade = models.PositiveIntegerField()
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    posicao = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'vendas_item_pedido'
        ordering = ['posicao', 'id']

    def __str__(self):
        return f"{self.quantidade}x {self.nome_produto} em Pedido {self.pedido.numero}"
