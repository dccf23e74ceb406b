from django.contrib import admin
from .models import Company, Person


class PersonInline(admin.TabularInline):

    model = Person
    extra = 0
    fields = ['name', 'job_title', 'source']
    show_change_link = True


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = ['id', 'name', 'vat_number', 'agency', 'open_deals', 'closed_deals', 'created_at']
    list_filter = ['agency']
    search_fields = ['name', 'vat_number', 'j_number']
    readonly_fields = ['open_deals', 'closed_deals', 'created_at', 'updated_at']
    inlines = [PersonInline]


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):

    list_display = ['id', 'name', 'job_title', 'company', 'agency', 'open_deals', 'closed_deals']
    list_filter = ['agency', 'source']
    search_fields = ['name', 'job_title', 'company__name']
    readonly_fields = ['open_deals', 'closed_deals', 'created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('company', 'agency')
