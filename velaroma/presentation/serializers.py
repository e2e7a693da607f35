from rest_framework import serializers
from rest_framework.fields import empty

from velaroma.catalog.models import Banner, Essencia, Produto as ProdutoModel
from velaroma.core.pedidos import DadosCheckout


# ====================================================================
# SERIALIZERS DO CATÁLOGO
# ====================================================================

class EssenciaSerializer(serializers.ModelSerializer):
    class Meta:
        model = Essencia
        fields = ['id', 'nome', 'descricao', 'imagem_url', 'ativo']
        read_only_fields = ['ativo']


class ProdutoSerializer(serializers.ModelSerializer):
    essencias = serializers.PrimaryKeyRelatedField(
        many=True, required=False, queryset=Essencia.objects.filter(ativo=True)
    )

    class Meta:
        model = ProdutoModel
        fields = ['id', 'nome', 'descricao', 'preco', 'imagem_url', 'ativo', 'essencias']
        read_only_fields = ['ativo']

    def validate_preco(self, value):
        if value < 0:
            raise serializers.ValidationError("O preço não pode ser negativo.")
        return value


class BannerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Banner
        fields = ['id', 'titulo', 'descricao', 'imagem_url', 'link', 'ativo', 'ordem_exibicao']
        read_only_fields = ['ativo']


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    """Representação de um ItemCarrinho (entidade do Core)."""
    produto_id = serializers.CharField()
    nome = serializers.CharField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantidade = serializers.IntegerField()
    imagem_url = serializers.CharField(allow_null=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


# Limite por requisição para manter os subtotais dentro das colunas de valor
QUANTIDADE_MAXIMA = 999


class AdicionarItemSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    quantidade = serializers.IntegerField(required=False, default=1, min_value=1, max_value=QUANTIDADE_MAXIMA)


class AtualizarQuantidadeSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    # Zero ou negativo remove o item
    quantidade = serializers.IntegerField(max_value=QUANTIDADE_MAXIMA)


# SERIALIZER PARA CHECKOUT
# ====================================================================
class CheckoutSerializer(serializers.Serializer):
    """
    Conversão dos dados de checkout para texto.
    Todas as regras (obrigatoriedade, tamanho, e-mail, UF) ficam no ConstrutorPedido,
    que devolve todos os erros de uma vez.
    """
    nome_cliente = serializers.CharField(required=False, allow_blank=True, default='')
    email_cliente = serializers.CharField(required=False, allow_blank=True, default='')
    telefone_cliente = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    endereco_rua = serializers.CharField(required=False, allow_blank=True, default='')
    endereco_numero = serializers.CharField(required=False, allow_blank=True, default='')
    endereco_complemento = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    endereco_cidade = serializers.CharField(required=False, allow_blank=True, default='')
    endereco_estado = serializers.CharField(required=False, allow_blank=True, default='')
    endereco_cep = serializers.CharField(required=False, allow_blank=True, default='')

    def to_dados_checkout(self) -> DadosCheckout:
        return DadosCheckout(**self.validated_data)

    def dados_parciais(self) -> DadosCheckout:
        """Campos que passaram na conversão; os que falharam entram vazios."""
        if not hasattr(self.initial_data, 'get'):
            return DadosCheckout()
        dados = {
            nome: campo.run_validation(self.initial_data.get(nome, empty))
            for nome, campo in self.fields.items()
            if nome not in self.errors
        }
        return DadosCheckout(**dados)

    def erros_de_formato(self):
        return {campo: str(mensagens[0]) for campo, mensagens in self.errors.items()}


# ====================================================================
# SERIALIZERS DE PEDIDO (saída)
# ====================================================================

class ClienteSerializer(serializers.Serializer):
    nome = serializers.CharField()
    email = serializers.CharField()
    telefone = serializers.CharField(allow_null=True)


class EnderecoSerializer(serializers.Serializer):
    rua = serializers.CharField()
    numero = serializers.CharField()
    complemento = serializers.CharField(allow_null=True)
    cidade = serializers.CharField()
    estado = serializers.CharField()
    cep = serializers.CharField()


class ItemPedidoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    nome_produto = serializers.CharField()
    quantidade = serializers.IntegerField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class PedidoSerializer(serializers.Serializer):
    id = serializers.CharField()
    numero = serializers.CharField()
    cliente = ClienteSerializer()
    endereco = EnderecoSerializer()
    itens = ItemPedidoSerializer(many=True)
    valor_frete = serializers.DecimalField(max_digits=10, decimal_places=2)
    valor_total = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField()
    status_pagamento = serializers.CharField()
    codigo_rastreio = serializers.CharField(allow_null=True)
    observacoes = serializers.CharField(allow_null=True)
    criado_em = serializers.DateTimeField()
    atualizado_em = serializers.DateTimeField()


class AtualizarStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    codigo_rastreio = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AtualizarPagamentoSerializer(serializers.Serializer):
    status_pagamento = serializers.CharField()
