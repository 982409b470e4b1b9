from django.contrib import admin

from contracts_core.models import Organization


# Organizations on a contract are protected: the admin's delete page
# lists the contracts that block the delete and refuses it
@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "inn", "phone", "bank", "created_at")
    search_fields = ("name", "inn")
    readonly_fields = ("created_at",)
