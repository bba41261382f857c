from django.contrib import admin

from .models import CotisationCampaign, MemberCotisation, CotisationPayment


class CotisationPaymentInline(admin.TabularInline):
    model = CotisationPayment
    extra = 0


@admin.register(CotisationCampaign)
class CotisationCampaignAdmin(admin.ModelAdmin):
    list_display = ('name', 'church', 'type', 'frequency', 'default_amount', 'target_scope', 'start_date', 'end_date')
    list_filter = ('type', 'frequency', 'target_scope')
    search_fields = ('name', 'description')


@admin.register(MemberCotisation)
class MemberCotisationAdmin(admin.ModelAdmin):
    list_display = ('member', 'campaign', 'expected_amount', 'due_date', 'statut')
    list_filter = ('campaign',)
    inlines = [CotisationPaymentInline]

    @admin.display(description="Statut")
    def statut(self, obj):
        return obj.status

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('member', 'campaign').prefetch_related('payments')
