import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from velaroma.catalog.models import Banner, Essencia, Produto as ProdutoModel
from velaroma.core.dependency_injection import (
    get_carrinho,
    get_finalizar_checkout_use_case,
    get_gerenciar_pedidos_admin_use_case,
    get_listar_produtos_use_case,
    get_politica_frete,
    get_usuario_atual,
)
from velaroma.core.exceptions import (
    AcessoNegadoError,
    BaseErroCore,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    PersistenciaError,
    TransicaoInvalidaError,
)
from velaroma.core.pedidos import validar_checkout
from velaroma.core.precos import resumir
from velaroma.core.status import TRANSICOES_PEDIDO

from .permissions import IsAdministrador
from .serializers import (
    AdicionarItemSerializer,
    AtualizarPagamentoSerializer,
    AtualizarQuantidadeSerializer,
    AtualizarStatusSerializer,
    BannerSerializer,
    CheckoutSerializer,
    EssenciaSerializer,
    ItemCarrinhoSerializer,
    PedidoSerializer,
    ProdutoSerializer,
)

logger = logging.getLogger(__name__)


# ====================================================================
# TRADUÇÃO DAS EXCEÇÕES DO CORE PARA RESPOSTAS HTTP
# ====================================================================

STATUS_POR_ERRO = [
    (DadosInvalidosError, status.HTTP_400_BAD_REQUEST),
    (ItemNaoEncontradoError, status.HTTP_404_NOT_FOUND),
    (TransicaoInvalidaError, status.HTTP_409_CONFLICT),
    (AcessoNegadoError, status.HTTP_403_FORBIDDEN),
    (PersistenciaError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def resposta_de_erro(erro: BaseErroCore) -> Response:
    """Monta a resposta JSON correspondente a uma exceção do Core."""
    codigo = next(
        (codigo for tipo, codigo in STATUS_POR_ERRO if isinstance(erro, tipo)),
        status.HTTP_400_BAD_REQUEST,
    )
    corpo = {'message': str(erro)}
    if isinstance(erro, DadosInvalidosError):
        corpo['erros'] = erro.erros
    return Response(corpo, status=codigo)


# ====================================================================
# API DO CATÁLOGO
# ====================================================================

class CatalogoViewSetMixin:
    """
    Leitura pública (apenas registros ativos) e escrita restrita a administradores.
    O DELETE apenas desativa o registro.
    """
    acoes_de_escrita = ['create', 'update', 'partial_update', 'destroy']

    def get_permissions(self):
        if self.action in self.acoes_de_escrita:
            self.permission_classes = [IsAdministrador]
        else:
            self.permission_classes = [AllowAny]
        return [permission() for permission in self.permission_classes]

    def get_queryset(self):
        queryset = super().get_queryset()
        if IsAdministrador().has_permission(self.request, self):
            return queryset
        return queryset.filter(ativo=True)

    def perform_destroy(self, instance):
        instance.ativo = False
        instance.save(update_fields=['ativo', 'atualizado_em'])
        logger.info("%s %s desativado por %s.", instance.__class__.__name__, instance.pk, self.request.user.pk)


class ProdutoViewSet(CatalogoViewSetMixin, viewsets.ModelViewSet):
    """API ViewSet para as velas (produtos)."""
    queryset = ProdutoModel.objects.prefetch_related('essencias').order_by('nome')
    serializer_class = ProdutoSerializer


class EssenciaViewSet(CatalogoViewSetMixin, viewsets.ModelViewSet):
    queryset = Essencia.objects.order_by('nome')
    serializer_class = EssenciaSerializer


class BannerViewSet(CatalogoViewSetMixin, viewsets.ModelViewSet):
    queryset = Banner.objects.all()
    serializer_class = BannerSerializer


# ====================================================================
# API DO CARRINHO (sessão anônima)
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para o carrinho da sessão atual. Não exige login.
    Todas as respostas devolvem o carrinho completo com o resumo de valores.
    """
    permission_classes = [AllowAny]

    def _resposta_carrinho(self, carrinho, status_http=status.HTTP_200_OK):
        itens = carrinho.itens
        resumo = resumir(itens, get_politica_frete())
        return Response({
            'itens': ItemCarrinhoSerializer(itens, many=True).data,
            'total_unidades': carrinho.total_unidades,
            'subtotal': str(resumo.subtotal),
            'frete': str(resumo.frete),
            'total': str(resumo.total),
        }, status=status_http)

    def get(self, request):
        return self._resposta_carrinho(get_carrinho(request))

    def post(self, request):
        """Adiciona um produto ativo ao carrinho (ou incrementa a quantidade)."""
        serializer = AdicionarItemSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'erros': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            produto = get_listar_produtos_use_case().detalhar(serializer.validated_data['produto_id'])
        except ItemNaoEncontradoError as e:
            return resposta_de_erro(e)

        carrinho = get_carrinho(request)
        carrinho.adicionar_item(produto, serializer.validated_data['quantidade'])
        return self._resposta_carrinho(carrinho, status.HTTP_201_CREATED)

    def patch(self, request):
        """Altera a quantidade de um item. Zero ou negativo remove o item."""
        serializer = AtualizarQuantidadeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'erros': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        carrinho = get_carrinho(request)
        carrinho.atualizar_quantidade(
            serializer.validated_data['produto_id'], serializer.validated_data['quantidade']
        )
        return self._resposta_carrinho(carrinho)

    def delete(self, request):
        """Remove um item (com produto_id) ou esvazia o carrinho (sem produto_id)."""
        carrinho = get_carrinho(request)
        produto_id = request.data.get('produto_id') or request.query_params.get('produto_id')
        if produto_id:
            carrinho.remover_item(produto_id)
        else:
            carrinho.limpar()
        return self._resposta_carrinho(carrinho)


# ====================================================================
# API DE CHECKOUT (visitante)
# ====================================================================

class CheckoutAPIView(APIView):
    """
    API View para o checkout sem cadastro. Os itens vêm do carrinho da sessão;
    o corpo da requisição traz apenas os dados do cliente e do endereço.
    """
    permission_classes = [AllowAny]

    @extend_schema(request=CheckoutSerializer, responses={201: PedidoSerializer})
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        carrinho = get_carrinho(request)

        if not serializer.is_valid():
            # Mesmo formato e mesma coleta completa dos erros do ConstrutorPedido
            erros = validar_checkout(carrinho.itens, serializer.dados_parciais(), get_politica_frete())
            erros.update(serializer.erros_de_formato())
            return resposta_de_erro(DadosInvalidosError(erros))

        try:
            pedido = get_finalizar_checkout_use_case().executar(carrinho, serializer.to_dados_checkout())
        except BaseErroCore as e:
            return resposta_de_erro(e)

        return Response(PedidoSerializer(pedido).data, status=status.HTTP_201_CREATED)


# ====================================================================
# API ADMINISTRATIVA DE PEDIDOS
# ====================================================================

class PedidoAdminViewSet(viewsets.ViewSet):
    """
    Listagem, detalhe e mudanças de status dos pedidos.
    Toda alteração passa pelo GerenciarPedidosAdminUseCase (máquina de status).
    """
    permission_classes = [IsAdministrador]

    def _use_case(self):
        return get_gerenciar_pedidos_admin_use_case()

    @extend_schema(
        parameters=[OpenApiParameter('status', str, description="Filtra pelo status do pedido.")],
        responses={200: PedidoSerializer(many=True)},
    )
    def list(self, request):
        filtro = (request.query_params.get('status') or '').strip().lower() or None
        if filtro and filtro not in TRANSICOES_PEDIDO:
            return Response(
                {'erros': {'status': f"O status '{filtro}' não é um status válido."}},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            pedidos = self._use_case().listar_todos(get_usuario_atual(request), filtro)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedidos, many=True).data)

    @extend_schema(responses={200: PedidoSerializer})
    def retrieve(self, request, pk=None):
        try:
            pedido = self._use_case().detalhar_pedido(get_usuario_atual(request), pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)

    @extend_schema(request=AtualizarStatusSerializer, responses={200: PedidoSerializer})
    @action(detail=True, methods=['post'], url_path='status')
    def atualizar_status(self, request, pk=None):
        serializer = AtualizarStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'erros': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            pedido = self._use_case().atualizar_status(
                get_usuario_atual(request),
                pk,
                serializer.validated_data['status'],
                codigo_rastreio=serializer.validated_data.get('codigo_rastreio'),
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)

    @extend_schema(request=AtualizarPagamentoSerializer, responses={200: PedidoSerializer})
    @action(detail=True, methods=['post'], url_path='pagamento')
    def atualizar_pagamento(self, request, pk=None):
        serializer = AtualizarPagamentoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'erros': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            pedido = self._use_case().atualizar_status_pagamento(
                get_usuario_atual(request), pk, serializer.validated_data['status_pagamento'],
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)
