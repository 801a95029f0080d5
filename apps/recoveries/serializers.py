from decimal import Decimal
from rest_framework import serializers
from .models import DailyRecovery
from apps.accounts.serializers import UserMinimalSerializer
from apps.stores.models import Store


AMOUNT_FIELD_OPTIONS = {
    'max_digits': 14,
    'decimal_places': 2,
    'min_value': Decimal('0'),
}


# =============================================================================
# Input Serializers
# =============================================================================

class RecoveryFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for recovery filtering.

    Query Parameters:
        store (UUID): Filter by store ID
        start_date (date): First day included
        end_date (date): Last day included
    """

    store = serializers.UUIDField(required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')

        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be on or after start date'
            })

        return attrs


class DailyRecoveryInputSerializer(serializers.Serializer):
    """
    Validate a daily recovery submitted by an administrator.

    The gap is never accepted from input; it is derived from the amounts.
    """

    store = serializers.PrimaryKeyRelatedField(queryset=Store.objects.all())
    date = serializers.DateField()
    expected_amount = serializers.DecimalField(**AMOUNT_FIELD_OPTIONS)
    recovered_amount = serializers.DecimalField(**AMOUNT_FIELD_OPTIONS)
    expenses = serializers.DecimalField(required=False, default=Decimal('0'), **AMOUNT_FIELD_OPTIONS)
    observations = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_store(self, value):
        # Existing records may stay on a store deactivated after the fact
        if self.instance is not None and self.instance.store_id == value.id:
            return value
        if not value.is_active:
            raise serializers.ValidationError('This store is inactive')
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class DailyRecoverySerializer(serializers.ModelSerializer):
    """Serializer for daily recoveries, with the store join flattened."""
    
    store_name = serializers.CharField(source='store.name', read_only=True, default=None)
    store_code = serializers.CharField(source='store.code', read_only=True, default=None)
    created_by = UserMinimalSerializer(read_only=True)
    
    class Meta:
        model = DailyRecovery
        fields = [
            'id',
            'store',
            'store_name',
            'store_code',
            'date',
            'expected_amount',
            'recovered_amount',
            'expenses',
            'gap',
            'observations',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
