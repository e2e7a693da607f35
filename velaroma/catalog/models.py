from django.db import models

# ====================================================================
# 1. Essência
# ====================================================================

class Essencia(models.Model):
    """Aroma opcional associado às velas (Ex: Lavanda, Baunilha, Capim-limão)."""
    nome = models.CharField(max_length=255, verbose_name="Nome da Essência")
    descricao = models.TextField(blank=True, verbose_name="Descrição")
    imagem_url = models.URLField(max_length=500, blank=True, null=True, verbose_name="URL da Imagem")
    ativo = models.BooleanField(default=True)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Essência"
        verbose_name_plural = "Essências"
        db_table = 'catalogo_essencia'
        ordering = ['nome']

    def __str__(self):
        return self.nome

# ====================================================================
# 2. Produto (Vela)
# ====================================================================

class Produto(models.Model):
    """Modelo para representar um produto (vela aromática) no catálogo."""
    nome = models.CharField(max_length=255, verbose_name="Nome do Produto")
    descricao = models.TextField(blank=True, verbose_name="Descrição")
    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço de Venda")
    imagem_url = models.URLField(max_length=500, blank=True, null=True, verbose_name="URL da Imagem")
    # Exclusão é lógica: produtos inativos somem da loja mas continuam referenciados nos pedidos
    ativo = models.BooleanField(default=True)

    essencias = models.ManyToManyField(Essencia, blank=True, related_name='produtos')

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ['nome']
        db_table = 'catalogo_produto'

    def __str__(self):
        return self.nome

    @property
    def preco_formatado(self):
        """Retorna o preço formatado em Real Brasileiro."""
        return f"R$ {self.preco:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")

# ====================================================================
# 3. Banner
# ====================================================================

class Banner(models.Model):
    """Banner promocional exibido na home."""
    titulo = models.CharField(max_length=255)
    descricao = models.TextField(blank=True)
    imagem_url = models.URLField(max_length=500)
    link = models.CharField(max_length=500, blank=True, null=True)
    ativo = models.BooleanField(default=True)
    ordem_exibicao = models.IntegerField(default=0)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Banner"
        verbose_name_plural = "Banners"
        ordering = ['ordem_exibicao', 'id']
        db_table = 'catalogo_banner'

    def __str__(self):
        return self.titulo
