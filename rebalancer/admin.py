from django.contrib import admin
from django.db.models import Sum

from .models import Asset, AssetClassTarget, Portfolio


class AssetInline(admin.TabularInline):
    model = Asset
    extra = 0
    fields = (
        "name",
        "ticker",
        "asset_class",
        "sub_asset_type",
        "current_value",
        "target_mode",
        "target_percent",
        "target_value",
        "sort_order",
    )


class AssetClassTargetInline(admin.TabularInline):
    model = AssetClassTarget
    extra = 0


class PortfolioAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "get_total_value", "modified_date")
    search_fields = ("name", "user__username")
    inlines = [AssetClassTargetInline, AssetInline]

    @admin.display(description="Total value")
    def get_total_value(self, obj: Portfolio):
        return obj.assets.aggregate(total=Sum("current_value"))["total"] or 0


class AssetAdmin(admin.ModelAdmin):
    list_display = ("name", "ticker", "asset_class", "current_value", "target_mode", "portfolio")
    list_filter = ("asset_class", "sub_asset_type", "target_mode", "portfolio")
    search_fields = ("name", "ticker", "identifier")


admin.site.register(Portfolio, PortfolioAdmin)
admin.site.register(Asset, AssetAdmin)
admin.site.register(AssetClassTarget)
