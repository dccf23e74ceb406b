# Models:
# 1. User - Custom user model (brokers and agency admins)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.core.validators import RegexValidator
from django.utils.translation import gettext_lazy as _


# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (platform admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password (required)
            **extra_fields: Additional fields (first_name, agency, role, ...)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='broker@agency.ro',
                password='securepass123',
                first_name='Andrei',
                last_name='Popescu',
                role='BROKER'
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser

        Superusers have all permissions and can access the admin panel
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', 'ADMIN')

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)


# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for the brokerage CRM

    Features:
    - Email-based authentication (no username)
    - Multi-tenancy support (agency field)
    - Role-based access (ADMIN sees the whole agency, BROKER sees own deals)
    """

    ROLE_CHOICES = [
        ('ADMIN', _('Administrator')),
        ('BROKER', _('Broker')),
    ]

    email = models.EmailField(_('email address'), unique=True, max_length=255, db_index=True, help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'), max_length=50, blank=True)
    last_name = models.CharField(_('last name'), max_length=50, blank=True)

    phone_validator = RegexValidator(regex=r'^\+?1?\d{9,15}$', message=_('Phone number must be entered in the format: +999999999. Up to 15 digits allowed.'))
    phone = models.CharField(_('phone number'), validators=[phone_validator], max_length=17, blank=True, null=True)

    # AGENCY & ROLE (Multi-tenancy)
    agency = models.ForeignKey('core.Agency', on_delete=models.CASCADE, related_name='users',
                               null=True, blank=True, verbose_name=_('agency'), help_text=_('The agency this user belongs to'))

    role = models.CharField(_('role'), max_length=20, choices=ROLE_CHOICES, default='BROKER', db_index=True,
                            help_text=_('ADMIN (whole agency) or BROKER (own deals)'))

    avatar = models.ImageField(_('profile picture'), upload_to='avatars/%Y/%m/', blank=True, null=True)
    is_active = models.BooleanField(_('active'), default=True, help_text=_('Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']
        indexes = [
            models.Index(fields=['agency', 'role'], name='user_agency_role_idx'),
            models.Index(fields=['is_active'], name='user_is_active_idx'),
        ]

    def __str__(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    def get_full_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        return self.email

    def get_short_name(self):

        return self.first_name if self.first_name else self.email

    # ROLE CHECKS
    def is_admin(self):

        return self.role == 'ADMIN' or self.is_superuser

    def is_broker(self):

        return self.role == 'BROKER'

    def to_summary(self):
        """Compact representation embedded in deal/offer payloads"""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
        }
