import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.decorators import page_permission_required, church_required
from .engine import campaign_stats, filter_campaigns, filter_pledges, pledge_status, remaining_amount
from .exports import export_campaign_pledges, export_campaign_report, FORMATS
from .forms import (
    CampaignForm, PaymentForm, GroupPaymentForm, AddMembersForm, CampaignFilterForm, PledgeFilterForm,
)
from .models import CotisationCampaign, MemberCotisation
from .services import (
    create_campaign, add_payment, add_group_payment, add_members_to_campaign, available_members,
    campaign_pledges,
)

logger = logging.getLogger(__name__)


def _filtered_campaign_stats(request):
    church = request.user.church
    filters = CampaignFilterForm(request.GET or None)
    campaigns = CotisationCampaign.objects.filter(church=church).prefetch_related('pledges__payments')
    if filters.is_valid():
        campaigns = filter_campaigns(
            campaigns,
            filters.cleaned_data.get('q'),
            filters.cleaned_data.get('type') or 'all',
            filters.cleaned_data.get('date'),
        )
    today = timezone.localdate()
    return filters, [campaign_stats(c, c.pledges.all(), today) for c in campaigns]


def _filtered_pledges(request, campaign):
    filters = PledgeFilterForm(request.GET or None)
    pledges = campaign_pledges(campaign)
    if filters.is_valid():
        pledges = filter_pledges(pledges, filters.cleaned_data.get('status') or 'all', filters.cleaned_data.get('q'))
    return filters, list(pledges)


# ----------------------------------------------------
# Liste des campagnes
# ----------------------------------------------------
@church_required
@page_permission_required('cotisations')
def campaign_list_view(request):
    church = request.user.church
    filters, stats = _filtered_campaign_stats(request)
    return render(request, "cotisations/campaign_list.html", {
        "stats": stats,
        "filters": filters,
        "form": CampaignForm(church=church),
        "formats": FORMATS,
    })


@church_required
@page_permission_required('cotisations')
@require_POST
def campaign_create_view(request):
    church = request.user.church
    form = CampaignForm(request.POST, church=church)
    if form.is_valid():
        try:
            campaign = create_campaign(church, form.cleaned_data)
        except ValidationError as e:
            messages.error(request, e.messages[0])
        else:
            messages.success(request, f"✅ Cotisation « {campaign.name} » créée.")
            return redirect('cotisations:campaign_detail', pk=campaign.pk)
    else:
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return redirect('cotisations:campaign_list')


@church_required
@page_permission_required('cotisations')
def report_export_view(request, fmt):
    church = request.user.church
    _, stats = _filtered_campaign_stats(request)
    try:
        return export_campaign_report(church, stats, fmt)
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return redirect('cotisations:campaign_list')


# ----------------------------------------------------
# Détail d'une campagne
# ----------------------------------------------------
@church_required
@page_permission_required('cotisations')
def campaign_detail_view(request, pk):
    campaign = get_object_or_404(CotisationCampaign, pk=pk, church=request.user.church)
    today = timezone.localdate()
    filters, pledges = _filtered_pledges(request, campaign)
    rows = [
        {"pledge": p, "status": pledge_status(p, today), "remaining": remaining_amount(p)}
        for p in pledges
    ]
    members = available_members(campaign)
    return render(request, "cotisations/campaign_detail.html", {
        "campaign": campaign,
        "stats": campaign_stats(campaign, campaign_pledges(campaign), today),
        "rows": rows,
        "filters": filters,
        "payment_form": PaymentForm(initial={'date': today}),
        "group_payment_form": GroupPaymentForm(initial={'date': today}),
        "add_members_form": AddMembersForm(members=members, initial={'expected_amount': campaign.default_amount}),
        "amount_locked": not campaign.is_amount_free and campaign.default_amount > 0,
        "formats": FORMATS,
    })


@church_required
@page_permission_required('cotisations')
@require_POST
def add_payment_view(request, pk, pledge_id):
    pledge = get_object_or_404(
        MemberCotisation, pk=pledge_id, campaign__pk=pk, campaign__church=request.user.church
    )
    form = PaymentForm(request.POST)
    if form.is_valid():
        try:
            add_payment(pledge, form.cleaned_data['amount'], form.cleaned_data['date'], form.cleaned_data['method'])
        except ValidationError as e:
            messages.error(request, e.messages[0])
        else:
            messages.success(request, f"✅ Versement enregistré pour {pledge.member_name}.")
    else:
        messages.error(request, "Montant invalide")
    return redirect('cotisations:campaign_detail', pk=pk)


@church_required
@page_permission_required('cotisations')
@require_POST
def group_payment_view(request, pk):
    campaign = get_object_or_404(CotisationCampaign, pk=pk, church=request.user.church)
    pledges = MemberCotisation.objects.filter(campaign=campaign)
    form = GroupPaymentForm(request.POST, pledges=pledges)
    if not form.is_valid():
        messages.error(request, "Veuillez entrer un montant valide.")
        return redirect('cotisations:campaign_detail', pk=pk)

    selected = pledges.filter(pk__in=form.cleaned_data['pledge_ids'])
    if not selected.exists():
        messages.error(request, "Veuillez sélectionner au moins un membre.")
        return redirect('cotisations:campaign_detail', pk=pk)
    try:
        payments = add_group_payment(
            selected, form.cleaned_data['amount'], form.cleaned_data['date'], form.cleaned_data['method']
        )
    except ValidationError as e:
        messages.error(request, e.messages[0])
    else:
        messages.success(request, f"✅ Paiement groupé enregistré pour {len(payments)} membre(s).")
    return redirect('cotisations:campaign_detail', pk=pk)


@church_required
@page_permission_required('cotisations')
@require_POST
def add_members_view(request, pk):
    campaign = get_object_or_404(CotisationCampaign, pk=pk, church=request.user.church)
    form = AddMembersForm(request.POST, members=available_members(campaign))
    if not form.is_valid():
        messages.error(request, "Veuillez sélectionner au moins un membre.")
        return redirect('cotisations:campaign_detail', pk=pk)
    try:
        created = add_members_to_campaign(
            campaign, form.cleaned_data['member_ids'], form.cleaned_data.get('expected_amount')
        )
    except ValidationError as e:
        messages.error(request, e.messages[0])
    else:
        messages.success(request, f"✅ {len(created)} membre(s) ajouté(s) à la cotisation.")
    return redirect('cotisations:campaign_detail', pk=pk)


@church_required
@page_permission_required('cotisations')
def campaign_export_view(request, pk, fmt):
    campaign = get_object_or_404(CotisationCampaign, pk=pk, church=request.user.church)
    _, pledges = _filtered_pledges(request, campaign)
    try:
        return export_campaign_pledges(campaign, pledges, fmt)
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return redirect('cotisations:campaign_detail', pk=pk)
