"""
Tests for Custom Decorators
============================

Tests all custom decorators to ensure proper access control.

Test Cases:
1. api_login_required decorator
2. agency_required decorator
3. admin_required decorator
"""
import json

from django.test import TestCase, RequestFactory
from django.contrib.auth import get_user_model
from django.http import HttpResponse
from django.contrib.auth.models import AnonymousUser
from apps.core.models import Agency
from apps.accounts.decorators import (
    api_login_required,
    agency_required,
    admin_required,
)

User = get_user_model()


class ApiLoginRequiredDecoratorTest(TestCase):
    """Test @api_login_required decorator"""

    def setUp(self):
        """Setup test data"""
        self.factory = RequestFactory()

        self.user = User.objects.create_user(
            email='broker@test.com',
            password='testpass123',
            first_name='Andrei',
        )

        @api_login_required
        def dummy_view(request):
            return HttpResponse('Success')

        self.dummy_view = dummy_view

    def test_authenticated_user_allowed(self):
        """Logged in user reaches the view"""
        request = self.factory.get('/test/')
        request.user = self.user

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode(), 'Success')

    def test_anonymous_user_gets_401_json(self):
        """Anonymous user gets 401, never a redirect"""
        request = self.factory.get('/test/')
        request.user = AnonymousUser()

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 401)
        self.assertFalse(json.loads(response.content)['success'])


class AgencyRequiredDecoratorTest(TestCase):
    """Test @agency_required decorator"""

    def setUp(self):
        """Setup test data"""
        self.factory = RequestFactory()

        self.agency = Agency.objects.create(name='Test Agency')

        self.user_with_agency = User.objects.create_user(
            email='withagency@test.com',
            password='testpass123',
            first_name='Andrei',
            last_name='Popescu',
            agency=self.agency
        )

        self.user_without_agency = User.objects.create_user(
            email='noagency@test.com',
            password='testpass123',
            first_name='Maria',
            last_name='Ionescu'
        )

        @agency_required
        def dummy_view(request):
            return HttpResponse(f'Agency {request.agency.pk}')

        self.dummy_view = dummy_view

    def test_user_with_agency_allowed(self):
        """User with agency should be allowed and request.agency set"""
        request = self.factory.get('/test/')
        request.user = self.user_with_agency

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode(), f'Agency {self.agency.pk}')

    def test_user_without_agency_denied(self):
        """User without agency gets 403"""
        request = self.factory.get('/test/')
        request.user = self.user_without_agency

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 403)

    def test_suspended_agency_denied(self):
        """Users of a suspended agency get 403"""
        self.agency.status = 'SUSPENDED'
        self.agency.save()

        request = self.factory.get('/test/')
        request.user = User.objects.get(pk=self.user_with_agency.pk)

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 403)
        self.assertIn('suspended', json.loads(response.content)['error'])

    def test_anonymous_user_gets_401(self):
        request = self.factory.get('/test/')
        request.user = AnonymousUser()

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 401)

    def test_superuser_picks_agency_with_query_param(self):
        """Superuser without agency works on the agency passed in ?agency="""
        superuser = User.objects.create_superuser(email='root@test.com', password='testpass123')

        request = self.factory.get('/test/', {'agency': self.agency.pk})
        request.user = superuser

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode(), f'Agency {self.agency.pk}')

    def test_superuser_without_agency_param_denied(self):
        superuser = User.objects.create_superuser(email='root@test.com', password='testpass123')

        request = self.factory.get('/test/')
        request.user = superuser

        response = self.dummy_view(request)

        self.assertEqual(response.status_code, 403)


class AdminRequiredDecoratorTest(TestCase):
    """Test @admin_required decorator"""

    def setUp(self):
        """Setup test data"""
        self.factory = RequestFactory()

        self.agency = Agency.objects.create(name='Test Agency')

        self.admin_user = User.objects.create_user(
            email='admin@test.com',
            password='testpass123',
            first_name='Admin',
            agency=self.agency,
            role='ADMIN'
        )

        self.broker_user = User.objects.create_user(
            email='broker@test.com',
            password='testpass123',
            first_name='Broker',
            agency=self.agency,
            role='BROKER'
        )

        @admin_required
        def admin_only_view(request):
            return HttpResponse('Admin Access')

        self.admin_only_view = admin_only_view

    def test_admin_user_allowed(self):
        """Admin user should be allowed"""
        request = self.factory.get('/admin-action/')
        request.user = self.admin_user

        response = self.admin_only_view(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode(), 'Admin Access')

    def test_broker_user_denied(self):
        """Broker user should be denied with 403 JSON"""
        request = self.factory.get('/admin-action/')
        request.user = self.broker_user

        response = self.admin_only_view(request)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(json.loads(response.content)['error'], 'Admin access required')
