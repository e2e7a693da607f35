from decimal import Decimal
from unittest.mock import Mock, patch

from django.contrib import admin, messages
from django.contrib.messages import get_messages
from django.test import RequestFactory, TestCase
from django.contrib.sessions.backends.db import SessionStore
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from velaroma.catalog.models import Banner, Essencia, Produto as ProdutoModel
from velaroma.core.exceptions import PersistenciaError, TransicaoInvalidaError
from velaroma.core.status import StatusPedido
from velaroma.infrastructure.models import Usuario
from velaroma.presentation.context_processors import carrinho_context
from velaroma.vendas.models import Pedido as PedidoModel


CHECKOUT = {
    'nome_cliente': 'Ana Souza',
    'email_cliente': 'ana@example.com',
    'telefone_cliente': '11999990000',
    'endereco_rua': 'Rua das Flores',
    'endereco_numero': '42',
    'endereco_cidade': 'São Paulo',
    'endereco_estado': 'SP',
    'endereco_cep': '01000-000',
}


class CatalogoAPITestCase(APITestCase):

    def setUp(self):
        self.ativo = ProdutoModel.objects.create(nome='Vela Lavanda', preco=Decimal('45.00'))
        self.inativo = ProdutoModel.objects.create(nome='Vela Antiga', preco=Decimal('10.00'), ativo=False)
        self.admin = Usuario.objects.create_superuser('admin@example.com', 'senha-forte-123')
        self.cliente = Usuario.objects.create_user('cliente@example.com', 'senha-forte-123')

    def test_listagem_publica_mostra_apenas_ativos(self):
        response = self.client.get('/api/produtos/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['nome'] for p in response.data], ['Vela Lavanda'])
        self.assertEqual(response.data[0]['preco'], '45.00')

    def test_produto_inativo_nao_aparece_no_detalhe(self):
        response = self.client.get(f'/api/produtos/{self.inativo.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_escrita_exige_admin(self):
        dados = {'nome': 'Vela Nova', 'preco': '30.00'}

        response = self.client.post('/api/produtos/', dados, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.cliente)
        response = self.client.post('/api/produtos/', dados, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/produtos/', dados, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_delete_apenas_desativa(self):
        self.client.force_authenticate(self.admin)

        response = self.client.delete(f'/api/produtos/{self.ativo.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.ativo.refresh_from_db()
        self.assertFalse(self.ativo.ativo)

    def test_banners_publicos_em_ordem(self):
        Banner.objects.create(titulo='Segundo', imagem_url='https://example.com/2.jpg', ordem_exibicao=2)
        Banner.objects.create(titulo='Primeiro', imagem_url='https://example.com/1.jpg', ordem_exibicao=1)

        response = self.client.get('/api/banners/')

        self.assertEqual([b['titulo'] for b in response.data], ['Primeiro', 'Segundo'])


class CarrinhoCheckoutAPITestCase(APITestCase):

    def setUp(self):
        self.lavanda = ProdutoModel.objects.create(nome='Vela Lavanda', preco=Decimal('45.00'))
        self.baunilha = ProdutoModel.objects.create(nome='Vela Baunilha', preco=Decimal('40.00'))

    def _adicionar(self, produto, quantidade=1):
        return self.client.post(
            '/api/carrinho/', {'produto_id': str(produto.pk), 'quantidade': quantidade}, format='json'
        )

    def test_fluxo_do_carrinho(self):
        response = self._adicionar(self.lavanda, 2)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self._adicionar(self.baunilha)

        response = self.client.get('/api/carrinho/')
        self.assertEqual(response.data['total_unidades'], 3)
        self.assertEqual(response.data['subtotal'], '130.00')
        self.assertEqual(response.data['frete'], '0.00')

        response = self.client.patch(
            '/api/carrinho/', {'produto_id': str(self.lavanda.pk), 'quantidade': 0}, format='json'
        )
        self.assertEqual([i['nome'] for i in response.data['itens']], ['Vela Baunilha'])
        self.assertEqual(response.data['frete'], '15.00')
        self.assertEqual(response.data['total'], '55.00')

        response = self.client.delete('/api/carrinho/')
        self.assertEqual(response.data['itens'], [])
        self.assertEqual(response.data['total'], '0.00')

    def test_produto_inexistente_ou_inativo(self):
        response = self.client.post('/api/carrinho/', {'produto_id': '99999'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        self.lavanda.ativo = False
        self.lavanda.save()
        self.assertEqual(self._adicionar(self.lavanda).status_code, status.HTTP_404_NOT_FOUND)

    def test_checkout_com_sucesso(self):
        self._adicionar(self.lavanda)
        self._adicionar(self.baunilha)

        response = self.client.post('/api/checkout/', CHECKOUT, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertRegex(response.data['numero'], r'^ORD-\d+-[0-9A-F]{4}$')
        self.assertEqual(response.data['valor_frete'], '15.00')
        self.assertEqual(response.data['valor_total'], '100.00')
        self.assertEqual(response.data['status'], StatusPedido.PENDENTE)
        self.assertEqual(len(response.data['itens']), 2)

        # Carrinho esvaziado somente após o pedido ser salvo
        self.assertEqual(self.client.get('/api/carrinho/').data['total_unidades'], 0)
        self.assertEqual(PedidoModel.objects.count(), 1)

    def test_checkout_devolve_todos_os_erros(self):
        self._adicionar(self.lavanda)
        dados = dict(CHECKOUT, nome_cliente='', email_cliente='sem-arroba')

        response = self.client.post('/api/checkout/', dados, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(set(response.data['erros']), {'nome_cliente', 'email_cliente'})
        self.assertEqual(self.client.get('/api/carrinho/').data['total_unidades'], 1)

    def test_checkout_com_carrinho_vazio(self):
        response = self.client.post('/api/checkout/', CHECKOUT, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('itens', response.data['erros'])
        self.assertEqual(PedidoModel.objects.count(), 0)

    def test_quantidade_fora_dos_limites(self):
        self.assertEqual(self._adicionar(self.lavanda, 10 ** 7).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._adicionar(self.lavanda, 0).status_code, status.HTTP_400_BAD_REQUEST)

        self._adicionar(self.lavanda)
        response = self.client.patch(
            '/api/carrinho/', {'produto_id': str(self.lavanda.pk), 'quantidade': 10 ** 7}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.get('/api/carrinho/').data['total_unidades'], 1)

    def test_checkout_acima_do_valor_maximo(self):
        raro = ProdutoModel.objects.create(nome='Vela de Coleção', preco=Decimal('60000000.00'))
        self.assertEqual(self._adicionar(raro, 2).status_code, status.HTTP_201_CREATED)

        response = self.client.post('/api/checkout/', CHECKOUT, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(set(response.data['erros']), {'itens'})
        self.assertEqual(PedidoModel.objects.count(), 0)

        # Uma nova tentativa também é recusada sem gravar nada
        response = self.client.post('/api/checkout/', CHECKOUT, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(PedidoModel.objects.count(), 0)
        self.assertEqual(self.client.get('/api/carrinho/').data['total_unidades'], 2)

    def test_checkout_campo_longo_nao_esconde_os_outros_erros(self):
        self._adicionar(self.lavanda)
        dados = dict(CHECKOUT, nome_cliente='A' * 300, email_cliente='invalido', endereco_cep='')

        response = self.client.post('/api/checkout/', dados, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        erros = response.data['erros']
        self.assertEqual(set(erros), {'nome_cliente', 'email_cliente', 'endereco_cep'})
        self.assertTrue(all(isinstance(mensagem, str) for mensagem in erros.values()))

    def test_checkout_tipo_invalido_junta_com_erros_de_regra(self):
        dados = dict(CHECKOUT, nome_cliente={'primeiro': 'Ana'}, email_cliente='invalido')

        response = self.client.post('/api/checkout/', dados, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        erros = response.data['erros']
        self.assertEqual(set(erros), {'nome_cliente', 'email_cliente', 'itens'})
        self.assertIsInstance(erros['nome_cliente'], str)
        self.assertEqual(erros['email_cliente'], 'Email válido é obrigatório.')

    def test_falha_ao_salvar_mantem_o_carrinho(self):
        self._adicionar(self.lavanda)

        with patch(
            'velaroma.infrastructure.repositories.PedidoRepositoryDjango.criar',
            side_effect=PersistenciaError(),
        ):
            response = self.client.post('/api/checkout/', CHECKOUT, format='json')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(self.client.get('/api/carrinho/').data['total_unidades'], 1)


class PedidoAdminAPITestCase(APITestCase):

    def setUp(self):
        self.admin = Usuario.objects.create_user('gestor@example.com', 'senha-forte-123', papel='admin')
        self.cliente = Usuario.objects.create_user('cliente@example.com', 'senha-forte-123')
        produto = ProdutoModel.objects.create(nome='Kit Relaxar', preco=Decimal('120.00'))

        self.client.post('/api/carrinho/', {'produto_id': str(produto.pk)}, format='json')
        self.pedido_id = self.client.post('/api/checkout/', CHECKOUT, format='json').data['id']
        self.url = f'/api/admin/pedidos/{self.pedido_id}/'

    def test_acesso_restrito(self):
        self.assertEqual(self.client.get('/api/admin/pedidos/').status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.cliente)
        self.assertEqual(self.client.get('/api/admin/pedidos/').status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.post(self.url + 'status/', {'status': 'processing'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_listar_e_detalhar(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get('/api/admin/pedidos/', {'status': 'pending'})
        self.assertEqual([p['id'] for p in response.data], [self.pedido_id])
        self.assertEqual(self.client.get('/api/admin/pedidos/', {'status': 'shipped'}).data, [])
        self.assertEqual(
            self.client.get('/api/admin/pedidos/', {'status': 'perdido'}).status_code,
            status.HTTP_400_BAD_REQUEST,
        )

        response = self.client.get(self.url)
        self.assertEqual(response.data['valor_total'], '120.00')
        self.assertEqual(response.data['cliente']['nome'], 'Ana Souza')

    def test_pedido_inexistente(self):
        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get('/api/admin/pedidos/99999/').status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.post('/api/admin/pedidos/99999/status/', {'status': 'processing'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_ciclo_de_status(self):
        self.client.force_authenticate(self.admin)

        for novo in ('processing', 'shipped', 'delivered'):
            response = self.client.post(self.url + 'status/', {'status': novo}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data['status'], novo)

        # Entregue é terminal
        response = self.client.post(self.url + 'status/', {'status': 'cancelled'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(PedidoModel.objects.get(pk=self.pedido_id).status, StatusPedido.ENTREGUE)

    def test_status_desconhecido(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(self.url + 'status/', {'status': 'extraviado'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_status_de_pagamento(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.url + 'pagamento/', {'status_pagamento': 'completed'}, format='json')
        self.assertEqual(response.data['status_pagamento'], 'completed')

        response = self.client.post(self.url + 'pagamento/', {'status_pagamento': 'pending'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)


class CarrinhoContextTestCase(TestCase):

    def test_contador_do_carrinho(self):
        request = RequestFactory().get('/')
        request.session = SessionStore()
        request.session['carrinho_velaroma'] = [
            {'produto_id': '1', 'nome': 'Vela', 'preco_unitario': '10.00', 'quantidade': 2},
        ]
        self.assertEqual(carrinho_context(request), {'quantidade_itens_carrinho': 2})


class AdminDjangoTestCase(TestCase):

    def setUp(self):
        self.admin = Usuario.objects.create_superuser('admin@example.com', 'senha-forte-123')
        self.client.force_login(self.admin)
        self.pedido = PedidoModel.objects.create(
            numero='ORD-1-ADMN',
            nome_cliente='Ana Souza',
            email_cliente='ana@example.com',
            endereco_rua='Rua das Flores',
            endereco_numero='42',
            endereco_cidade='São Paulo',
            endereco_estado='SP',
            endereco_cep='01000-000',
            valor_total=Decimal('100.00'),
            valor_frete=Decimal('15.00'),
        )
        self.url_pedido = reverse('admin:vendas_pedido_change', args=[self.pedido.pk])

    def _alterar_pedido(self, **campos):
        dados = {
            'status': self.pedido.status,
            'status_pagamento': self.pedido.status_pagamento,
            'codigo_rastreio': '',
            'observacoes': '',
            # Formulário de gerenciamento do inline de itens
            'itens-TOTAL_FORMS': '0',
            'itens-INITIAL_FORMS': '0',
            'itens-MIN_NUM_FORMS': '0',
            'itens-MAX_NUM_FORMS': '1000',
        }
        dados.update(campos)
        return self.client.post(self.url_pedido, dados)

    def test_pedido_nao_pode_ser_excluido(self):
        request = RequestFactory().get('/admin/')
        request.user = self.admin
        pedido_admin = admin.site._registry[PedidoModel]

        self.assertFalse(pedido_admin.has_delete_permission(request, self.pedido))
        self.assertNotIn('delete_selected', pedido_admin.get_actions(request))

        response = self.client.post(
            reverse('admin:vendas_pedido_delete', args=[self.pedido.pk]), {'post': 'yes'}
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(PedidoModel.objects.filter(pk=self.pedido.pk).exists())

    def test_excluir_produto_apenas_desativa(self):
        produto = ProdutoModel.objects.create(nome='Vela Lavanda', preco=Decimal('45.00'))

        response = self.client.post(reverse('admin:catalog_produto_delete', args=[produto.pk]), {'post': 'yes'})

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        produto.refresh_from_db()
        self.assertFalse(produto.ativo)

    def test_excluir_selecionados_apenas_desativa(self):
        lavanda = Essencia.objects.create(nome='Lavanda')
        baunilha = Essencia.objects.create(nome='Baunilha')

        self.client.post(reverse('admin:catalog_essencia_changelist'), {
            'action': 'delete_selected',
            '_selected_action': [lavanda.pk, baunilha.pk],
            'post': 'yes',
        })

        self.assertEqual(Essencia.objects.count(), 2)
        self.assertFalse(Essencia.objects.filter(ativo=True).exists())

    def test_transicao_valida_grava_status_e_campos_livres(self):
        response = self._alterar_pedido(
            status=StatusPedido.PROCESSANDO, codigo_rastreio='BR123', observacoes='Embalar para presente'
        )

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.pedido.refresh_from_db()
        self.assertEqual(self.pedido.status, StatusPedido.PROCESSANDO)
        self.assertEqual(self.pedido.codigo_rastreio, 'BR123')
        self.assertEqual(self.pedido.observacoes, 'Embalar para presente')

    def test_transicao_invalida_nao_altera_o_pedido(self):
        PedidoModel.objects.filter(pk=self.pedido.pk).update(status=StatusPedido.CANCELADO)
        self.pedido.refresh_from_db()

        response = self._alterar_pedido(
            status=StatusPedido.PENDENTE, codigo_rastreio='BR999', observacoes='Reabrir'
        )

        # O formulário volta com o erro no campo de status
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('status', response.context['adminform'].form.errors)
        self.assertEqual(list(get_messages(response.wsgi_request)), [])

        self.pedido.refresh_from_db()
        self.assertEqual(self.pedido.status, StatusPedido.CANCELADO)
        self.assertIsNone(self.pedido.codigo_rastreio)
        self.assertIsNone(self.pedido.observacoes)

    def test_gravacao_recusada_nao_mostra_sucesso(self):
        use_case = Mock()
        use_case.atualizar_status.side_effect = TransicaoInvalidaError(
            StatusPedido.PROCESSANDO, StatusPedido.PROCESSANDO
        )

        with patch('velaroma.presentation.admin.get_gerenciar_pedidos_admin_use_case', return_value=use_case):
            self._alterar_pedido(status=StatusPedido.PROCESSANDO, codigo_rastreio='BR123')

        niveis = [mensagem.level for mensagem in get_messages(self.client.get(self.url_pedido).wsgi_request)]
        self.assertEqual(niveis, [messages.ERROR])
        self.pedido.refresh_from_db()
        self.assertEqual(self.pedido.status, StatusPedido.PENDENTE)
        self.assertIsNone(self.pedido.codigo_rastreio)
