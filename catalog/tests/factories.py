from decimal import Decimal

import factory
from catalog.models import Category, Product, ProductReview
from django.contrib.auth import get_user_model
from factory import Faker
from factory.django import DjangoModelFactory


class UserFactory(DjangoModelFactory):
    class Meta:
        model = get_user_model()

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = Faker("first_name")
    last_name = Faker("last_name")
    password = factory.PostGenerationMethodCall("set_password", "pass12345")


class AdminFactory(UserFactory):
    is_staff = True


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    slug = factory.LazyAttribute(lambda o: o.name.lower().replace(" ", "-"))
    description = Faker("sentence")
    is_active = True
    sort_order = 0


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    slug = factory.LazyAttribute(lambda o: o.name.lower().replace(" ", "-"))
    sku = factory.Sequence(lambda n: f"SKU-{n:05d}")
    description = Faker("paragraph")
    price = Decimal("100.00")
    stock_quantity = 10
    category = factory.SubFactory(CategoryFactory)
    is_active = True
    images = factory.LazyFunction(lambda: ["https://img.example.com/a.jpg"])
    tags = factory.LazyFunction(list)
    specifications = factory.LazyFunction(dict)


class ReviewFactory(DjangoModelFactory):
    class Meta:
        model = ProductReview

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory(UserFactory)
    rating = 5
    title = Faker("sentence", nb_words=4)
