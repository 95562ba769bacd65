from django import forms

from rebalancer.models import Asset


class AssetForm(forms.ModelForm):
    """Create or edit one asset.

    Target consistency (mode vs. percent/value) is enforced by
    ``Asset.clean()``, which ModelForm runs during validation.
    """

    class Meta:
        model = Asset
        fields = [
            "name",
            "ticker",
            "identifier",
            "asset_class",
            "sub_asset_type",
            "current_value",
            "target_mode",
            "target_percent",
            "target_value",
        ]
        widgets = {
            "target_percent": forms.NumberInput(attrs={"step": "0.01"}),
            "target_value": forms.NumberInput(attrs={"step": "0.01"}),
            "current_value": forms.NumberInput(attrs={"step": "0.01"}),
        }
