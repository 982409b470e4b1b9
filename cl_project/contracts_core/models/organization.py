from django.db import models

from ..exceptions import ReferentialError


# ---------- Organization ----------
# Legal entity that appears on contracts as customer or contractor
class Organization(models.Model):
    name = models.CharField(max_length=255)

    # Postal / contact details
    postal_index = models.CharField(max_length=20, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    phone = models.CharField(max_length=50, null=True, blank=True)
    fax = models.CharField(max_length=50, null=True, blank=True)

    # Tax identifier, unique across organizations when present
    inn = models.CharField(max_length=20, null=True, blank=True, unique=True)

    # Banking details
    bank = models.TextField(null=True, blank=True)
    corr_account = models.CharField(max_length=34, null=True, blank=True)
    checking_account = models.CharField(max_length=34, null=True, blank=True)
    bik = models.CharField(max_length=20, null=True, blank=True)

    # Statistical registry codes
    okonh = models.CharField(max_length=20, null=True, blank=True)
    okpo = models.CharField(max_length=20, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "organizations"
        ordering = ("name",)

    def __str__(self):
        return self.name

    def is_referenced(self):
        from .contract import Contract  # avoid circular import

        return Contract.objects.filter(
            models.Q(customer=self) | models.Q(contractor=self)
        ).exists()

    def clean(self):
        # Empty tax id is "no tax id", so it must not collide with other blanks
        if self.inn is not None and not self.inn.strip():
            self.inn = None

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)

    """ Contracts keep their parties: an organization
    referenced by any contract can't be deleted """

    def delete(self, *args, **kwargs):
        if self.is_referenced():
            raise ReferentialError(
                f"Organization '{self.name}' is referenced by contracts.")
        return super().delete(*args, **kwargs)
