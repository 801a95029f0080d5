# ==========================================
# apps/recoveries/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class DailyRecovery(models.Model):
    """Cash expected, recovered and spent by one store on one day."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    # Deleting a store keeps its history as records without a store join
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recoveries'
    )
    date = models.DateField()
    
    # Amounts (single implied currency, displayed without decimals)
    expected_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    recovered_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    expenses = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    
    # Always expected_amount - recovered_amount, positive means deficit
    gap = models.DecimalField(max_digits=14, decimal_places=2, editable=False)
    
    observations = models.TextField(blank=True)
    
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recoveries_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'daily_recoveries'
        verbose_name_plural = 'daily recoveries'
        indexes = [
            models.Index(fields=['date'], name='recoveries_date_idx'),
            models.Index(fields=['store', 'date'], name='recoveries_store_date_idx'),
        ]
        ordering = ['-date', '-created_at']
    
    def __str__(self):
        store = self.store.name if self.store else "Unknown store"
        return f"{store} - {self.date}"
    
    def save(self, *args, **kwargs):
        self.gap = self.compute_gap()
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'gap' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['gap']
        super().save(*args, **kwargs)
    
    def compute_gap(self):
        return Decimal(self.expected_amount) - Decimal(self.recovered_amount)
