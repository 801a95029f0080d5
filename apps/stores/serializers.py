from rest_framework import serializers
from .models import Store, StoreOwnerAssignment
from apps.accounts.models import User
from apps.accounts.serializers import UserMinimalSerializer


class StoreSerializer(serializers.ModelSerializer):
    """Main serializer for stores."""
    
    owner_count = serializers.SerializerMethodField()
    
    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'code',
            'address',
            'is_active',
            'owner_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']
    
    def get_owner_count(self, obj):
        return obj.owner_assignments.count()


class StoreMinimalSerializer(serializers.ModelSerializer):
    """Minimal store info for nested serialization."""
    
    class Meta:
        model = Store
        fields = ['id', 'name', 'code']
        read_only_fields = fields


class StoreCreateSerializer(serializers.Serializer):
    """Input serializer for creating a store."""
    
    name = serializers.CharField(max_length=200)
    code = serializers.CharField(max_length=20)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    
    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Store name cannot be blank')
        return value
    
    def validate_code(self, value):
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError('Store code cannot be blank')
        return value


class StoreUpdateSerializer(StoreCreateSerializer):
    """Input serializer for partial store updates."""
    
    name = serializers.CharField(max_length=200, required=False)
    code = serializers.CharField(max_length=20, required=False)
    is_active = serializers.BooleanField(required=False)


class StoreOwnerAssignmentSerializer(serializers.ModelSerializer):
    """Owner assignment with nested store and user."""
    
    store = StoreMinimalSerializer(read_only=True)
    user = UserMinimalSerializer(read_only=True)
    
    class Meta:
        model = StoreOwnerAssignment
        fields = ['id', 'store', 'user', 'created_at']
        read_only_fields = fields


class AssignOwnerSerializer(serializers.Serializer):
    """Input serializer for assigning an owner to a store."""
    
    store_id = serializers.UUIDField(required=True)
    user_id = serializers.UUIDField(required=True)


class OwnerProfileSerializer(serializers.ModelSerializer):
    """Owner account with the stores it is assigned to."""
    
    display_name = serializers.SerializerMethodField()
    stores = serializers.SerializerMethodField()
    
    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'display_name', 'stores']
        read_only_fields = fields
    
    def get_display_name(self, obj):
        return obj.get_display_name()
    
    def get_stores(self, obj):
        stores = [assignment.store for assignment in obj.store_assignments.all()]
        return StoreMinimalSerializer(stores, many=True).data
