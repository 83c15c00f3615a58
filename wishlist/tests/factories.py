import factory
from catalog.tests.factories import ProductFactory, UserFactory
from factory.django import DjangoModelFactory
from wishlist.models import WishlistItem


class WishlistItemFactory(DjangoModelFactory):
    class Meta:
        model = WishlistItem

    user = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
