# ==========================================
# apps/stores/models.py
# ==========================================

from django.db import models
import uuid


class Store(models.Model):
    """A point of sale whose daily cash recovery is tracked."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    code = models.CharField(max_length=20, unique=True)
    address = models.TextField(blank=True, null=True)
    
    # Soft delete: inactive stores leave selection lists but keep their history
    is_active = models.BooleanField(default=True)
    
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'stores'
        indexes = [
            models.Index(fields=['is_active', 'name'], name='stores_active_name_idx'),
        ]
        ordering = ['name']
    
    def __str__(self):
        return f"{self.name} ({self.code})"
    
    def has_owner(self, user):
        return self.owner_assignments.filter(user=user).exists()


class StoreOwnerAssignment(models.Model):
    """Gives a store owner read access to one store."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name='owner_assignments')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='store_assignments')
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'store_owners'
        unique_together = [['store', 'user']]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.user.get_display_name()} owns {self.store.name}"
