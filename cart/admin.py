"""Admin registration for cart models.

Shows cart lines inline on the cart page for support staff and offers a
bulk action to empty selected carts.
"""

from django.contrib import admin, messages

from .models import Cart, CartItem
from .services import clear_cart


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("product", "quantity", "variant_details", "updated_at")
    readonly_fields = ("updated_at",)
    autocomplete_fields = ("product",)


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "item_count", "updated_at")
    search_fields = ("user__email",)
    inlines = [CartItemInline]
    actions = ["empty_carts"]

    @admin.display(description="Items")
    def item_count(self, obj):
        return obj.items.count()

    @admin.action(description="Empty selected carts")
    def empty_carts(self, request, queryset):
        removed = 0
        for cart in queryset.select_related("user"):
            removed += clear_cart(user=cart.user)
        self.message_user(request, f"Removed {removed} cart line(s).", level=messages.SUCCESS)


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("id", "cart", "product", "quantity", "updated_at")
    search_fields = ("product__name", "cart__user__email")
