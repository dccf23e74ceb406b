import logging

from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods, require_POST

from apps.accounts.decorators import api_login_required, agency_required
from apps.core.utils import parse_json_body, paginate, instance_form_data, form_errors, isoformat
from .forms import CompanyForm, PersonForm, AssignCompanyForm
from .models import Company, Person


logger = logging.getLogger(__name__)


def serialize_company(company):
    return {
        'id': company.id,
        'name': company.name,
        'vat_number': company.vat_number,
        'j_number': company.j_number,
        'iban': company.iban,
        'address': company.address,
        'open_deals': company.open_deals,
        'closed_deals': company.closed_deals,
        'created_at': isoformat(company.created_at),
    }


def serialize_person(person):
    return {
        'id': person.id,
        'name': person.name,
        'job_title': person.job_title,
        'emails': person.emails,
        'phones': person.phones,
        'source': person.source,
        'company': person.company.to_summary() if person.company else None,
        'open_deals': person.open_deals,
        'closed_deals': person.closed_deals,
        'created_at': isoformat(person.created_at),
    }


# COMPANIES

@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def company_list_view(request):
    if request.method == 'GET':
        companies = Company.objects.filter(agency=request.agency)

        search_query = request.GET.get('search', '').strip()
        if search_query:
            companies = companies.filter(
                Q(name__icontains=search_query) |
                Q(vat_number__icontains=search_query)
            )

        return JsonResponse(paginate(companies.order_by('name'), request, serialize_company))

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = CompanyForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    company = form.save(commit=False)
    company.agency = request.agency
    company.user = request.user
    company.save()

    logger.info(f"Company {company.pk} created by {request.user.email}")

    return JsonResponse(serialize_company(company), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def company_detail_view(request, pk):
    company = get_object_or_404(Company.objects.filter(agency=request.agency), pk=pk)

    if request.method == 'GET':
        data = serialize_company(company)
        data['persons'] = [person.to_summary() for person in company.persons.all()]
        return JsonResponse(data)

    if request.method == 'DELETE':
        if not request.user.is_admin():
            return JsonResponse({'success': False, 'error': 'Admin access required'}, status=403)

        company.delete()
        logger.info(f"Company {pk} deleted by {request.user.email}")
        return JsonResponse({'success': True, 'message': 'Company deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(company, CompanyForm.Meta.fields)
    data.update(payload)

    form = CompanyForm(data, instance=company)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    company = form.save()

    return JsonResponse(serialize_company(company))


# PERSONS

@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def person_list_view(request):
    if request.method == 'GET':
        persons = Person.objects.filter(agency=request.agency).select_related('company')

        search_query = request.GET.get('search', '').strip()
        if search_query:
            persons = persons.filter(
                Q(name__icontains=search_query) |
                Q(emails__icontains=search_query) |
                Q(phones__icontains=search_query)
            )

        company_id = request.GET.get('company_id')
        if company_id and company_id.isdigit():
            persons = persons.filter(company_id=company_id)

        return JsonResponse(paginate(persons.order_by('name'), request, serialize_person))

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = PersonForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    person = form.save(commit=False)
    person.agency = request.agency
    person.user = request.user
    person.save()

    return JsonResponse(serialize_person(person), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def person_detail_view(request, pk):
    person = get_object_or_404(Person.objects.filter(agency=request.agency).select_related('company'), pk=pk)

    if request.method == 'GET':
        return JsonResponse(serialize_person(person))

    if request.method == 'DELETE':
        person.delete()
        logger.info(f"Person {pk} deleted by {request.user.email}")
        return JsonResponse({'success': True, 'message': 'Person deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(person, PersonForm.Meta.fields)
    data.update(payload)

    form = PersonForm(data, instance=person, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    person = form.save()

    return JsonResponse(serialize_person(person))


@api_login_required
@agency_required
@require_POST
def person_assign_company_view(request, pk):
    person = get_object_or_404(Person.objects.filter(agency=request.agency), pk=pk)

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = AssignCompanyForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    person.company = form.cleaned_data['company_id']
    person.save(update_fields=['company', 'updated_at'])

    return JsonResponse(serialize_person(person))
