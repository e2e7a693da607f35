from decimal import Decimal, InvalidOperation
from io import StringIO
from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.contrib.sessions.backends.db import SessionStore
from django.core.management import call_command
from django.test import RequestFactory, TestCase

# Importamos as classes que queremos testar
from velaroma.catalog.models import Banner, Essencia, Produto as ProdutoModel
from velaroma.core.carrinho import CarrinhoStore
from velaroma.core.entities import PAPEL_ADMIN, PAPEL_USUARIO, Produto as ProdutoEntity
from velaroma.core.exceptions import (
    NumeroPedidoDuplicadoError,
    PedidoNaoEncontradoError,
    PersistenciaError,
    TransicaoInvalidaError,
)
from velaroma.core.pedidos import ConstrutorPedido, DadosCheckout
from velaroma.core.status import StatusPagamento, StatusPedido
from velaroma.infrastructure.models import Usuario
from velaroma.infrastructure.repositories import PedidoRepositoryDjango, ProdutoRepositoryDjango
from velaroma.infrastructure.sessao import ArmazenamentoSessaoDjango, AutenticacaoDjango, carrinho_atualizado
from velaroma.vendas.models import Pedido as PedidoModel


DADOS = DadosCheckout(
    nome_cliente='Ana Souza',
    email_cliente='ana@example.com',
    endereco_rua='Rua das Flores',
    endereco_numero='42',
    endereco_cidade='Campinas',
    endereco_estado='SP',
    endereco_cep='13000-000',
)


class ProdutoRepositoryTestCase(TestCase):

    def setUp(self):
        self.repository = ProdutoRepositoryDjango()
        self.lavanda = ProdutoModel.objects.create(nome='Vela Lavanda', preco=Decimal('45.00'))
        self.inativo = ProdutoModel.objects.create(nome='Vela Antiga', preco=Decimal('10.00'), ativo=False)

    def test_buscar_por_id_com_sucesso(self):
        produto = self.repository.buscar_por_id(str(self.lavanda.pk))

        self.assertIsInstance(produto, ProdutoEntity)
        self.assertEqual(produto.id, str(self.lavanda.pk))
        self.assertEqual(produto.preco, Decimal('45.00'))

    def test_buscar_por_id_nao_encontrado(self):
        self.assertIsNone(self.repository.buscar_por_id('99999'))
        self.assertIsNone(self.repository.buscar_por_id('nao-numerico'))

    def test_listar_ativos(self):
        ids = [produto.id for produto in self.repository.listar_ativos()]
        self.assertEqual(ids, [str(self.lavanda.pk)])


class PedidoRepositoryTestCase(TestCase):

    def setUp(self):
        self.repository = PedidoRepositoryDjango()
        self.lavanda = ProdutoModel.objects.create(nome='Vela Lavanda', preco=Decimal('45.00'))
        self.baunilha = ProdutoModel.objects.create(nome='Vela Baunilha', preco=Decimal('40.00'))

        produtos = ProdutoRepositoryDjango()
        self.carrinho = CarrinhoStore(ArmazenamentoSessaoDjango(SessionStore()))
        self.carrinho.adicionar_item(produtos.buscar_por_id(str(self.lavanda.pk)), 2)
        self.carrinho.adicionar_item(produtos.buscar_por_id(str(self.baunilha.pk)))

    def _construir(self, numero='ORD-1-AAAA'):
        return ConstrutorPedido(gerar_numero=lambda: numero).construir(self.carrinho.itens, DADOS)

    def test_criar_pedido_com_itens(self):
        pedido = self.repository.criar(self._construir())

        self.assertIsNotNone(pedido.id)
        self.assertEqual(pedido.numero, 'ORD-1-AAAA')
        self.assertEqual(pedido.valor_frete, Decimal('0.00'))
        self.assertEqual(pedido.valor_total, Decimal('130.00'))
        self.assertEqual([i.nome_produto for i in pedido.itens], ['Vela Lavanda', 'Vela Baunilha'])
        self.assertEqual(pedido.itens[0].subtotal, Decimal('90.00'))
        self.assertEqual(pedido.cliente.email, 'ana@example.com')
        self.assertEqual(PedidoModel.objects.count(), 1)

    def test_criar_devolve_o_pedido_sem_reler_do_banco(self):
        with patch.object(self.repository, 'buscar_por_id', side_effect=AssertionError('releitura')):
            pedido = self.repository.criar(self._construir())

        model = PedidoModel.objects.get(numero='ORD-1-AAAA')
        self.assertEqual(pedido.id, str(model.pk))
        self.assertEqual(pedido.criado_em, model.criado_em)
        self.assertEqual(pedido.valor_total, Decimal('130.00'))

    def test_erro_de_conversao_dos_valores_desfaz_o_pedido(self):
        with patch(
            'velaroma.infrastructure.repositories.ItemPedidoMapper.to_model',
            side_effect=InvalidOperation(),
        ):
            with self.assertRaises(PersistenciaError):
                self.repository.criar(self._construir())

        # Nada fica gravado pela metade
        self.assertEqual(PedidoModel.objects.count(), 0)

    def test_snapshot_sobrevive_a_mudanca_de_preco(self):
        pedido = self.repository.criar(self._construir())

        self.lavanda.preco = Decimal('99.00')
        self.lavanda.save()
        self.lavanda.delete()

        recarregado = self.repository.buscar_por_id(pedido.id)
        self.assertEqual(recarregado.itens[0].preco_unitario, Decimal('45.00'))
        self.assertEqual(recarregado.valor_total, Decimal('130.00'))

    def test_numero_duplicado(self):
        self.repository.criar(self._construir())

        with self.assertRaises(NumeroPedidoDuplicadoError):
            self.repository.criar(self._construir())

        self.assertEqual(PedidoModel.objects.count(), 1)

    def test_listar_com_filtro(self):
        primeiro = self.repository.criar(self._construir('ORD-1-0001'))
        self.repository.criar(self._construir('ORD-1-0002'))
        self.repository.atualizar_status(primeiro.id, StatusPedido.PENDENTE, StatusPedido.CANCELADO)

        self.assertEqual(len(self.repository.listar()), 2)
        cancelados = self.repository.listar(StatusPedido.CANCELADO)
        self.assertEqual([p.numero for p in cancelados], ['ORD-1-0001'])

    def test_atualizar_status_condicional(self):
        pedido = self.repository.criar(self._construir())

        atualizado = self.repository.atualizar_status(
            pedido.id, StatusPedido.PENDENTE, StatusPedido.PROCESSANDO, codigo_rastreio='BR123'
        )
        self.assertEqual(atualizado.status, StatusPedido.PROCESSANDO)
        self.assertEqual(atualizado.codigo_rastreio, 'BR123')

        # Outra requisição já mudou o status: a gravação com o valor antigo é recusada
        with self.assertRaises(TransicaoInvalidaError):
            self.repository.atualizar_status(pedido.id, StatusPedido.PENDENTE, StatusPedido.CANCELADO)
        self.assertEqual(self.repository.buscar_por_id(pedido.id).status, StatusPedido.PROCESSANDO)

    def test_atualizar_pedido_inexistente(self):
        with self.assertRaises(PedidoNaoEncontradoError):
            self.repository.atualizar_status_pagamento('99999', StatusPagamento.PENDENTE, StatusPagamento.CONCLUIDO)


class ArmazenamentoSessaoTestCase(TestCase):

    def setUp(self):
        self.sessao = SessionStore()
        self.notificacoes = []
        carrinho_atualizado.connect(self._receber, weak=False)
        self.addCleanup(carrinho_atualizado.disconnect, self._receber)

    def _receber(self, sender, total_unidades, **kwargs):
        self.notificacoes.append(total_unidades)

    def test_salva_na_sessao_e_emite_sinal(self):
        carrinho = CarrinhoStore(ArmazenamentoSessaoDjango(self.sessao, chave='carrinho_teste'))
        carrinho.adicionar_item(ProdutoEntity(id='7', nome='Vela', preco=Decimal('12.50')), 3)

        self.assertEqual(self.sessao['carrinho_teste'][0]['preco_unitario'], '12.50')
        self.assertEqual(self.notificacoes, [3])

        # Uma nova leitura da mesma sessão enxerga o carrinho gravado
        outro = CarrinhoStore(ArmazenamentoSessaoDjango(self.sessao, chave='carrinho_teste'))
        self.assertEqual(outro.total_unidades, 3)

    def test_valor_invalido_na_sessao(self):
        self.sessao['carrinho_velaroma'] = 'corrompido'
        self.assertEqual(ArmazenamentoSessaoDjango(self.sessao).carregar(), [])


class AutenticacaoDjangoTestCase(TestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_anonimo(self):
        request = self.factory.get('/')
        request.user = AnonymousUser()
        self.assertIsNone(AutenticacaoDjango(request).usuario_atual())

    def test_papeis(self):
        cliente = Usuario.objects.create_user('cliente@example.com', 'senha-forte-123')
        admin = Usuario.objects.create_superuser('admin@example.com', 'senha-forte-123')
        self.assertEqual(admin.papel, PAPEL_ADMIN)

        request = self.factory.get('/')
        request.user = cliente
        self.assertEqual(AutenticacaoDjango(request).usuario_atual().papel, PAPEL_USUARIO)

        request.user = admin
        usuario = AutenticacaoDjango(request).usuario_atual()
        self.assertTrue(usuario.is_admin)
        self.assertEqual(usuario.id, str(admin.pk))


class CarregarDadosIniciaisTestCase(TestCase):

    def test_pode_rodar_duas_vezes(self):
        call_command('carregar_dados_iniciais', stdout=StringIO())
        contagem = (Essencia.objects.count(), ProdutoModel.objects.count(), Banner.objects.count())
        call_command('carregar_dados_iniciais', stdout=StringIO())

        self.assertEqual(contagem, (Essencia.objects.count(), ProdutoModel.objects.count(), Banner.objects.count()))
        self.assertTrue(all(contagem))
        kit = ProdutoModel.objects.get(nome='Kit Relaxar')
        self.assertEqual(kit.essencias.count(), 2)
