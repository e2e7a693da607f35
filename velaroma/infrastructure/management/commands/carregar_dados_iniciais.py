from decimal import Decimal

from django.core.management.base import BaseCommand

from velaroma.catalog.models import Banner, Essencia, Produto


ESSENCIAS = [
    ('Lavanda', 'Floral e calmante, ideal para o quarto.'),
    ('Baunilha', 'Doce e aconchegante.'),
    ('Capim-limão', 'Cítrico e refrescante.'),
    ('Sândalo', 'Amadeirado e marcante.'),
]

# (nome, descrição, preço, essências)
PRODUTOS = [
    ('Vela Lavanda Clássica', 'Vela de cera de soja em pote de vidro, 200 g.', Decimal('45.00'), ['Lavanda']),
    ('Vela Baunilha Doce', 'Vela de cera de soja, 150 g.', Decimal('40.00'), ['Baunilha']),
    ('Vela Capim-limão', 'Vela cítrica em lata, 180 g.', Decimal('35.00'), ['Capim-limão']),
    ('Kit Relaxar', 'Três velas pequenas com aromas florais.', Decimal('120.00'), ['Lavanda', 'Sândalo']),
]

BANNERS = [
    ('Coleção de Inverno', 'Aromas amadeirados para os dias frios.', 'https://picsum.photos/seed/velaroma-inverno/1200/400', 0),
    ('Frete grátis acima de R$ 100', 'Válido para todo o Brasil.', 'https://picsum.photos/seed/velaroma-frete/1200/400', 1),
]


class Command(BaseCommand):
    help = 'Carrega essências, velas e banners de exemplo (pode ser executado várias vezes)'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando dados iniciais...')

        essencias = {}
        for nome, descricao in ESSENCIAS:
            essencia, created = Essencia.objects.get_or_create(nome=nome, defaults={'descricao': descricao})
            essencias[nome] = essencia
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criada essência "{essencia.nome}"'))

        for nome, descricao, preco, nomes_essencias in PRODUTOS:
            produto, created = Produto.objects.get_or_create(
                nome=nome,
                defaults={'descricao': descricao, 'preco': preco},
            )
            if created:
                produto.essencias.set([essencias[n] for n in nomes_essencias])
                self.stdout.write(self.style.SUCCESS(f'Criado produto "{produto.nome}"'))

        for titulo, descricao, imagem_url, ordem in BANNERS:
            _, created = Banner.objects.get_or_create(
                titulo=titulo,
                defaults={'descricao': descricao, 'imagem_url': imagem_url, 'ordem_exibicao': ordem},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criado banner "{titulo}"'))

        self.stdout.write(self.style.SUCCESS('Dados iniciais carregados com sucesso!'))
