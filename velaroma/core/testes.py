# velaroma/core/testes.py

import re
import unittest
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

# Importamos as classes que queremos testar
from velaroma.core.carrinho import CarrinhoStore
from velaroma.core.entities import PAPEL_ADMIN, ItemCarrinho, Produto, UsuarioAtual
from velaroma.core.exceptions import (
    AcessoNegadoError,
    DadosInvalidosError,
    NumeroPedidoDuplicadoError,
    PedidoNaoEncontradoError,
    PersistenciaError,
    ProdutoNaoEncontradoError,
    TransicaoInvalidaError,
)
from velaroma.core.pedidos import ConstrutorPedido, DadosCheckout, email_valido, gerar_numero_pedido
from velaroma.core.precos import VALOR_MAXIMO, PoliticaFrete, calcular_frete, calcular_subtotal, calcular_total, resumir
from velaroma.core.status import StatusPagamento, StatusPedido, is_terminal, validar_transicao, validar_transicao_pagamento
from velaroma.core.use_cases import FinalizarCheckoutUseCase, GerenciarPedidosAdminUseCase, ListarProdutosUseCase


class ArmazenamentoMemoria:
    """Armazenamento de carrinho em memória, registrando cada gravação."""

    def __init__(self, dados=None):
        self.dados = dados or []
        self.gravacoes = 0
        self.notificacoes = []

    def carregar(self):
        return self.dados

    def salvar(self, itens):
        self.dados = itens
        self.gravacoes += 1

    def notificar_alteracao(self, total_unidades):
        self.notificacoes.append(total_unidades)


def dados_validos(**alteracoes):
    dados = DadosCheckout(
        nome_cliente='Ana Souza',
        email_cliente='ana@example.com',
        telefone_cliente='11999990000',
        endereco_rua='Rua das Flores',
        endereco_numero='42',
        endereco_complemento='Apto 3',
        endereco_cidade='São Paulo',
        endereco_estado='SP',
        endereco_cep='01000-000',
    )
    return replace(dados, **alteracoes)


LAVANDA = Produto(id='1', nome='Vela Lavanda', preco=Decimal('45.00'))
BAUNILHA = Produto(id='2', nome='Vela Baunilha', preco=Decimal('40.00'))
KIT = Produto(id='3', nome='Kit Relaxar', preco=Decimal('120.00'))


def item(produto, quantidade=1):
    return ItemCarrinho(produto_id=produto.id, nome=produto.nome, preco_unitario=produto.preco, quantidade=quantidade)


# ====================================================================
# MOTOR DE PREÇOS
# ====================================================================

class TestPrecos(unittest.TestCase):

    def test_carrinho_abaixo_do_limite_paga_frete(self):
        # 45 + 40 = 85 -> frete 15 -> total 100
        resumo = resumir([item(LAVANDA), item(BAUNILHA)])
        self.assertEqual(resumo.subtotal, Decimal('85.00'))
        self.assertEqual(resumo.frete, Decimal('15.00'))
        self.assertEqual(resumo.total, Decimal('100.00'))

    def test_carrinho_acima_do_limite_tem_frete_gratis(self):
        resumo = resumir([item(KIT)])
        self.assertEqual(resumo.subtotal, Decimal('120.00'))
        self.assertEqual(resumo.frete, Decimal('0.00'))
        self.assertEqual(resumo.total, Decimal('120.00'))

    def test_limite_exato_ainda_paga_frete(self):
        self.assertEqual(calcular_frete(Decimal('100.00')), Decimal('15.00'))
        self.assertEqual(calcular_frete(Decimal('100.01')), Decimal('0.00'))

    def test_carrinhos_de_referencia(self):
        vela_30 = Produto(id='20', nome='Vela 30', preco=Decimal('30.00'))
        vela_25 = Produto(id='21', nome='Vela 25', preco=Decimal('25.00'))
        vela_60 = Produto(id='22', nome='Vela 60', preco=Decimal('60.00'))

        # 30.00 x 2 + 25.00 x 1 = 85.00 -> frete 15.00 -> total 100.00
        resumo = resumir([item(vela_30, 2), item(vela_25)])
        self.assertEqual(
            (resumo.subtotal, resumo.frete, resumo.total),
            (Decimal('85.00'), Decimal('15.00'), Decimal('100.00')),
        )

        # 60.00 x 2 = 120.00 -> frete grátis -> total 120.00
        resumo = resumir([item(vela_60, 2)])
        self.assertEqual(
            (resumo.subtotal, resumo.frete, resumo.total),
            (Decimal('120.00'), Decimal('0.00'), Decimal('120.00')),
        )

    def test_carrinho_vazio_tem_total_zero(self):
        resumo = resumir([])
        self.assertEqual(resumo.subtotal, Decimal('0.00'))
        self.assertEqual(resumo.frete, Decimal('0.00'))
        self.assertEqual(calcular_total([]), Decimal('0.00'))

    def test_total_e_subtotal_mais_frete(self):
        itens = [item(LAVANDA, 2), item(BAUNILHA, 3)]
        self.assertEqual(calcular_total(itens), calcular_subtotal(itens) + calcular_frete(calcular_subtotal(itens)))

    def test_arredondamento_apenas_no_total(self):
        # Três linhas de 0.335: arredondar por linha daria 1.02, o exato é 1.005
        barato = Produto(id='9', nome='Pavio', preco=Decimal('0.335'))
        itens = [item(barato), replace(item(barato), produto_id='10'), replace(item(barato), produto_id='11')]
        self.assertEqual(calcular_subtotal(itens), Decimal('1.005'))
        self.assertEqual(calcular_total(itens), Decimal('16.01'))

    def test_politica_de_frete_configuravel(self):
        politica = PoliticaFrete(limite_frete_gratis=Decimal('50.00'), valor_frete=Decimal('9.90'))
        self.assertEqual(resumir([item(BAUNILHA)], politica).frete, Decimal('9.90'))
        self.assertEqual(resumir([item(LAVANDA, 2)], politica).frete, Decimal('0.00'))


# ====================================================================
# CARRINHO
# ====================================================================

class TestCarrinhoStore(unittest.TestCase):

    def setUp(self):
        self.armazenamento = ArmazenamentoMemoria()
        self.carrinho = CarrinhoStore(self.armazenamento)

    def test_adicionar_item_novo_e_existente(self):
        self.carrinho.adicionar_item(LAVANDA, 2)
        self.carrinho.adicionar_item(LAVANDA, 1)
        self.carrinho.adicionar_item(BAUNILHA)

        self.assertEqual(len(self.carrinho.itens), 2)
        self.assertEqual(self.carrinho.get_item('1').quantidade, 3)
        self.assertEqual(self.carrinho.total_unidades, 4)
        # Cada alteração é gravada imediatamente
        self.assertEqual(self.armazenamento.gravacoes, 3)
        self.assertEqual(self.armazenamento.notificacoes, [2, 3, 4])

    def test_adicionar_quantidade_nao_positiva_e_ignorado(self):
        self.carrinho.adicionar_item(LAVANDA, 0)
        self.carrinho.adicionar_item(LAVANDA, -1)
        self.assertTrue(self.carrinho.esta_vazio)
        self.assertEqual(self.armazenamento.gravacoes, 0)

    def test_atualizar_quantidade_zero_equivale_a_remover(self):
        self.carrinho.adicionar_item(LAVANDA, 2)
        self.carrinho.adicionar_item(BAUNILHA)

        self.carrinho.atualizar_quantidade('1', 0)

        self.assertIsNone(self.carrinho.get_item('1'))
        self.assertEqual([i.produto_id for i in self.carrinho.itens], ['2'])

    def test_atualizar_quantidade(self):
        self.carrinho.adicionar_item(LAVANDA)
        self.carrinho.atualizar_quantidade('1', 5)
        self.assertEqual(self.carrinho.get_item('1').quantidade, 5)
        self.assertEqual(self.armazenamento.dados[0]['quantidade'], 5)

    def test_atualizar_item_inexistente_nao_faz_nada(self):
        self.carrinho.atualizar_quantidade('999', 3)
        self.assertTrue(self.carrinho.esta_vazio)
        self.assertEqual(self.armazenamento.gravacoes, 0)

    def test_remover_item_inexistente_nao_grava(self):
        self.carrinho.adicionar_item(LAVANDA)
        self.carrinho.remover_item('999')
        self.assertEqual(self.armazenamento.gravacoes, 1)

    def test_limpar_duas_vezes(self):
        self.carrinho.adicionar_item(LAVANDA)
        self.carrinho.limpar()
        self.carrinho.limpar()
        self.assertTrue(self.carrinho.esta_vazio)
        self.assertEqual(self.armazenamento.dados, [])
        self.assertEqual(self.armazenamento.notificacoes[-2:], [0, 0])

    def test_recarrega_do_armazenamento(self):
        self.carrinho.adicionar_item(LAVANDA, 2)
        outro = CarrinhoStore(ArmazenamentoMemoria(self.armazenamento.dados))
        self.assertEqual(outro.get_item('1').quantidade, 2)
        self.assertEqual(outro.get_item('1').preco_unitario, Decimal('45.00'))

    def test_entradas_corrompidas_sao_descartadas(self):
        armazenamento = ArmazenamentoMemoria([
            {'produto_id': '1', 'nome': 'Vela', 'preco_unitario': '10.00', 'quantidade': 1},
            {'produto_id': '2', 'nome': 'Sem preço', 'quantidade': 1},
            {'produto_id': '3', 'nome': 'Preço inválido', 'preco_unitario': 'abc', 'quantidade': 1},
            {'produto_id': '4', 'nome': 'Zerado', 'preco_unitario': '10.00', 'quantidade': 0},
            'lixo',
        ])
        with self.assertLogs('velaroma.core.carrinho', level='WARNING'):
            carrinho = CarrinhoStore(armazenamento)
        self.assertEqual([i.produto_id for i in carrinho.itens], ['1'])

    def test_itens_devolve_copia(self):
        self.carrinho.adicionar_item(LAVANDA)
        self.carrinho.itens[0].quantidade = 99
        self.assertEqual(self.carrinho.get_item('1').quantidade, 1)

    def test_observadores(self):
        observador = Mock()
        cancelar = self.carrinho.inscrever(observador)

        self.carrinho.adicionar_item(LAVANDA)
        observador.assert_called_once_with(self.carrinho)

        cancelar()
        self.carrinho.adicionar_item(BAUNILHA)
        self.assertEqual(observador.call_count, 1)


# ====================================================================
# CONSTRUTOR DE PEDIDOS
# ====================================================================

class TestConstrutorPedido(unittest.TestCase):

    def setUp(self):
        self.agora = datetime(2024, 5, 10, 14, 30)
        self.construtor = ConstrutorPedido(gerar_numero=lambda: 'ORD-1-AAAA', relogio=lambda: self.agora)

    def test_constroi_pedido_pendente(self):
        pedido = self.construtor.construir([item(LAVANDA), item(BAUNILHA)], dados_validos(endereco_estado='sp'))

        self.assertEqual(pedido.numero, 'ORD-1-AAAA')
        self.assertEqual(pedido.status, StatusPedido.PENDENTE)
        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDENTE)
        self.assertEqual(pedido.valor_frete, Decimal('15.00'))
        self.assertEqual(pedido.valor_total, Decimal('100.00'))
        self.assertEqual(pedido.endereco.estado, 'SP')
        self.assertEqual(pedido.criado_em, self.agora)
        self.assertIsNone(pedido.id)
        self.assertEqual(len(pedido.itens), 2)

    def test_coleta_todos_os_erros(self):
        dados = dados_validos(nome_cliente='', email_cliente='email-invalido')

        with self.assertRaises(DadosInvalidosError) as ctx:
            self.construtor.construir([item(LAVANDA)], dados)

        self.assertEqual(set(ctx.exception.erros), {'nome_cliente', 'email_cliente'})

    def test_carrinho_vazio_e_erro_de_validacao(self):
        with self.assertRaises(DadosInvalidosError) as ctx:
            self.construtor.construir([], dados_validos())
        self.assertIn('itens', ctx.exception.erros)

    def test_estado_precisa_ter_duas_letras(self):
        with self.assertRaises(DadosInvalidosError) as ctx:
            self.construtor.construir([item(LAVANDA)], dados_validos(endereco_estado='São Paulo'))
        self.assertEqual(set(ctx.exception.erros), {'endereco_estado'})

    def test_campos_em_branco_sao_obrigatorios(self):
        with self.assertRaises(DadosInvalidosError) as ctx:
            self.construtor.construir([item(LAVANDA)], DadosCheckout())
        self.assertEqual(
            set(ctx.exception.erros),
            {'nome_cliente', 'email_cliente', 'endereco_rua', 'endereco_numero',
             'endereco_cidade', 'endereco_estado', 'endereco_cep'},
        )

    def test_tamanho_maximo_entra_na_mesma_coleta_de_erros(self):
        dados = dados_validos(nome_cliente='A' * 300, email_cliente='invalido', endereco_cep='')

        with self.assertRaises(DadosInvalidosError) as ctx:
            self.construtor.construir([item(LAVANDA)], dados)

        self.assertEqual(set(ctx.exception.erros), {'nome_cliente', 'email_cliente', 'endereco_cep'})
        self.assertEqual(ctx.exception.erros['nome_cliente'], 'Informe no máximo 255 caracteres.')

    def test_valor_acima_do_que_cabe_no_pedido(self):
        vela = Produto(id='30', nome='Vela 60', preco=Decimal('60.00'))

        with self.assertRaises(DadosInvalidosError) as ctx:
            self.construtor.construir([item(vela, 10 ** 7)], dados_validos())

        self.assertEqual(set(ctx.exception.erros), {'itens'})

    def test_total_igual_ao_valor_maximo_e_aceito(self):
        vela = Produto(id='31', nome='Vela de Coleção', preco=VALOR_MAXIMO)

        pedido = self.construtor.construir([item(vela)], dados_validos())

        self.assertEqual(pedido.valor_frete, Decimal('0.00'))
        self.assertEqual(pedido.valor_total, VALOR_MAXIMO)

    def test_snapshot_nao_muda_com_o_produto(self):
        itens = [item(LAVANDA, 2)]
        pedido = self.construtor.construir(itens, dados_validos())

        # Preço do produto muda depois do pedido
        itens[0].preco_unitario = Decimal('99.00')
        itens[0].quantidade = 10

        self.assertEqual(pedido.itens[0].preco_unitario, Decimal('45.00'))
        self.assertEqual(pedido.itens[0].quantidade, 2)
        self.assertEqual(pedido.itens[0].subtotal, Decimal('90.00'))
        self.assertEqual(pedido.valor_total, Decimal('105.00'))

    def test_construir_nao_altera_o_carrinho(self):
        carrinho = CarrinhoStore(ArmazenamentoMemoria())
        carrinho.adicionar_item(LAVANDA)
        self.construtor.construir(carrinho.itens, dados_validos())
        self.assertEqual(carrinho.total_unidades, 1)

    def test_com_novo_numero(self):
        numeros = iter(['ORD-1-AAAA', 'ORD-1-BBBB'])
        construtor = ConstrutorPedido(gerar_numero=lambda: next(numeros))
        pedido = construtor.construir([item(KIT)], dados_validos())
        outro = construtor.com_novo_numero(pedido)
        self.assertEqual(outro.numero, 'ORD-1-BBBB')
        self.assertEqual(outro.itens, pedido.itens)

    def test_formato_do_numero(self):
        self.assertRegex(gerar_numero_pedido(), re.compile(r'^ORD-\d{13}-[0-9A-F]{4}$'))

    def test_email_valido(self):
        self.assertTrue(email_valido('a@b.com'))
        self.assertFalse(email_valido('sem-arroba'))
        self.assertFalse(email_valido('dois@@arrobas'))
        self.assertFalse(email_valido('@dominio.com'))


# ====================================================================
# MÁQUINA DE STATUS
# ====================================================================

class TestStatus(unittest.TestCase):

    def test_ciclo_completo(self):
        status = StatusPedido.PENDENTE
        for proximo in (StatusPedido.PROCESSANDO, StatusPedido.ENVIADO, StatusPedido.ENTREGUE):
            status = validar_transicao(status, proximo)
        self.assertEqual(status, StatusPedido.ENTREGUE)
        self.assertTrue(is_terminal(status))

    def test_cancelar_de_status_nao_terminal(self):
        for atual in (StatusPedido.PENDENTE, StatusPedido.PROCESSANDO, StatusPedido.ENVIADO):
            self.assertEqual(validar_transicao(atual, StatusPedido.CANCELADO), StatusPedido.CANCELADO)

    def test_status_terminal_rejeita_transicao(self):
        for terminal in (StatusPedido.ENTREGUE, StatusPedido.CANCELADO):
            with self.assertRaises(TransicaoInvalidaError):
                validar_transicao(terminal, StatusPedido.PROCESSANDO)

    def test_nao_pula_etapas_nem_volta(self):
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao(StatusPedido.PENDENTE, StatusPedido.ENVIADO)
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao(StatusPedido.ENVIADO, StatusPedido.PENDENTE)
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao(StatusPedido.PENDENTE, StatusPedido.PENDENTE)

    def test_status_desconhecido(self):
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao(StatusPedido.PENDENTE, 'extraviado')
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao(StatusPedido.PENDENTE, None)

    def test_normaliza_rotulo(self):
        self.assertEqual(validar_transicao(StatusPedido.PENDENTE, ' Processing '), StatusPedido.PROCESSANDO)

    def test_transicoes_de_pagamento(self):
        self.assertEqual(validar_transicao_pagamento('pending', 'failed'), StatusPagamento.FALHOU)
        self.assertEqual(validar_transicao_pagamento('failed', 'pending'), StatusPagamento.PENDENTE)
        self.assertEqual(validar_transicao_pagamento('completed', 'refunded'), StatusPagamento.ESTORNADO)
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao_pagamento('refunded', 'completed')
        with self.assertRaises(TransicaoInvalidaError):
            validar_transicao_pagamento('pending', 'refunded')


# ====================================================================
# CASOS DE USO
# ====================================================================

class TestFinalizarCheckoutUseCase(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.pedido_repo_mock.criar.side_effect = lambda pedido: replace(pedido, id='10')
        self.numeros = iter(['ORD-1-0001', 'ORD-1-0002', 'ORD-1-0003', 'ORD-1-0004'])
        self.use_case = FinalizarCheckoutUseCase(
            pedido_repo=self.pedido_repo_mock,
            construtor=ConstrutorPedido(gerar_numero=lambda: next(self.numeros)),
        )
        self.armazenamento = ArmazenamentoMemoria()
        self.carrinho = CarrinhoStore(self.armazenamento)
        self.carrinho.adicionar_item(LAVANDA)
        self.carrinho.adicionar_item(BAUNILHA)

    def test_checkout_com_sucesso_limpa_o_carrinho(self):
        pedido = self.use_case.executar(self.carrinho, dados_validos())

        self.assertEqual(pedido.id, '10')
        self.assertEqual(pedido.valor_total, Decimal('100.00'))
        self.pedido_repo_mock.criar.assert_called_once()
        self.assertTrue(self.carrinho.esta_vazio)
        self.assertEqual(self.armazenamento.dados, [])

    def test_dados_invalidos_nao_persistem(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self.carrinho, dados_validos(email_cliente=''))

        self.pedido_repo_mock.criar.assert_not_called()
        self.assertEqual(self.carrinho.total_unidades, 2)

    def test_pedido_acima_do_limite_nao_persiste(self):
        self.carrinho.atualizar_quantidade(LAVANDA.id, 10 ** 7)

        with self.assertRaises(DadosInvalidosError) as ctx:
            self.use_case.executar(self.carrinho, dados_validos())

        self.assertIn('itens', ctx.exception.erros)
        self.pedido_repo_mock.criar.assert_not_called()
        self.assertEqual(self.carrinho.get_item(LAVANDA.id).quantidade, 10 ** 7)

    def test_falha_de_persistencia_mantem_o_carrinho(self):
        self.pedido_repo_mock.criar.side_effect = PersistenciaError()

        with self.assertRaises(PersistenciaError):
            self.use_case.executar(self.carrinho, dados_validos())

        self.assertEqual(self.carrinho.total_unidades, 2)

    def test_numero_duplicado_gera_outro_numero(self):
        tentativas = []

        def criar(pedido):
            tentativas.append(pedido.numero)
            if len(tentativas) < 3:
                raise NumeroPedidoDuplicadoError(pedido.numero)
            return replace(pedido, id='11')

        self.pedido_repo_mock.criar.side_effect = criar

        pedido = self.use_case.executar(self.carrinho, dados_validos())

        self.assertEqual(tentativas, ['ORD-1-0001', 'ORD-1-0002', 'ORD-1-0003'])
        self.assertEqual(pedido.numero, 'ORD-1-0003')
        self.assertTrue(self.carrinho.esta_vazio)

    def test_desiste_apos_tres_colisoes(self):
        def criar(pedido):
            raise NumeroPedidoDuplicadoError(pedido.numero)

        self.pedido_repo_mock.criar.side_effect = criar

        with self.assertRaises(NumeroPedidoDuplicadoError):
            self.use_case.executar(self.carrinho, dados_validos())

        self.assertEqual(self.pedido_repo_mock.criar.call_count, 3)
        self.assertFalse(self.carrinho.esta_vazio)


class TestGerenciarPedidosAdminUseCase(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.use_case = GerenciarPedidosAdminUseCase(self.pedido_repo_mock)
        self.admin = UsuarioAtual(id='1', papel=PAPEL_ADMIN)
        self.cliente = UsuarioAtual(id='2')
        construtor = ConstrutorPedido(gerar_numero=lambda: 'ORD-1-AAAA')
        self.pedido = replace(construtor.construir([item(KIT)], dados_validos()), id='5')
        self.pedido_repo_mock.buscar_por_id.return_value = self.pedido

    def test_apenas_admin(self):
        for usuario in (None, self.cliente):
            with self.assertRaises(AcessoNegadoError):
                self.use_case.listar_todos(usuario)
            with self.assertRaises(AcessoNegadoError):
                self.use_case.atualizar_status(usuario, '5', StatusPedido.PROCESSANDO)
        self.pedido_repo_mock.listar.assert_not_called()
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_listar_com_filtro(self):
        self.pedido_repo_mock.listar.return_value = [self.pedido]
        self.assertEqual(self.use_case.listar_todos(self.admin, StatusPedido.PENDENTE), [self.pedido])
        self.pedido_repo_mock.listar.assert_called_once_with(StatusPedido.PENDENTE)

    def test_atualizar_status_valido(self):
        atualizado = replace(self.pedido, status=StatusPedido.PROCESSANDO)
        self.pedido_repo_mock.atualizar_status.return_value = atualizado

        with self.assertLogs('velaroma.core.use_cases', level='INFO'):
            resultado = self.use_case.atualizar_status(self.admin, '5', 'processing', codigo_rastreio='  ')

        self.assertEqual(resultado.status, StatusPedido.PROCESSANDO)
        self.pedido_repo_mock.atualizar_status.assert_called_once_with(
            '5', status_anterior=StatusPedido.PENDENTE, novo_status=StatusPedido.PROCESSANDO, codigo_rastreio=None,
        )

    def test_transicao_invalida_nao_grava(self):
        with self.assertRaises(TransicaoInvalidaError):
            self.use_case.atualizar_status(self.admin, '5', StatusPedido.ENTREGUE)
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.detalhar_pedido(self.admin, '999')

    def test_atualizar_status_pagamento(self):
        self.pedido_repo_mock.atualizar_status_pagamento.return_value = replace(
            self.pedido, status_pagamento=StatusPagamento.CONCLUIDO
        )
        resultado = self.use_case.atualizar_status_pagamento(self.admin, '5', 'completed')
        self.assertEqual(resultado.status_pagamento, StatusPagamento.CONCLUIDO)
        self.pedido_repo_mock.atualizar_status_pagamento.assert_called_once_with(
            '5', status_anterior=StatusPagamento.PENDENTE, novo_status=StatusPagamento.CONCLUIDO,
        )


class TestListarProdutosUseCase(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()
        self.use_case = ListarProdutosUseCase(self.produto_repo_mock)

    def test_detalhar_produto_ativo(self):
        self.produto_repo_mock.buscar_por_id.return_value = LAVANDA
        self.assertEqual(self.use_case.detalhar('1'), LAVANDA)

    def test_produto_inativo_ou_inexistente(self):
        self.produto_repo_mock.buscar_por_id.return_value = replace(LAVANDA, ativo=False)
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.detalhar('1')

        self.produto_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.detalhar('2')


if __name__ == '__main__':
    unittest.main()
