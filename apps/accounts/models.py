# Models:
# 1. User - Custom user model (replaces Django's default), email login


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _



# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password (required)
            **extra_fields: Additional fields (first_name, last_name, etc.)

        Raises:
            ValueError: If email is not provided
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        # Normalize email (convert domain to lowercase)
        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', 'admin')

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)



# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for the CRM

    Features:
    - Email-based authentication (no username)
    - Multi-tenancy support (company field)
    - Role-based access (admin, agent)
    """

    ROLE_CHOICES = [
        ('admin', _('Administrator')),
        ('agent', _('Agent')),
    ]

    email = models.EmailField(_('email address'),unique=True,max_length=255,help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'),max_length=50,blank=True)
    last_name = models.CharField(_('last name'),max_length=50,blank=True)

    # COMPANY & ROLE (Multi-tenancy)
    company = models.ForeignKey('core.Company',on_delete=models.CASCADE,related_name='users',
              null=True,blank=True,verbose_name=_('company'),help_text=_('The company this user belongs to'))
    role = models.CharField(_('role'),max_length=20,choices=ROLE_CHOICES,
                            default='agent',db_index=True,help_text=_('User role: admin (full access) or agent (limited access)'))

    is_active = models.BooleanField(_('active'), default=True, help_text=_('Designates whether this user should be treated as active. Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False,help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    # Use email as the unique identifier for authentication
    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']  # Newest first

    def __str__(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    # HELPER METHODS
    def get_full_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        return self.email

    def get_short_name(self):

        return self.first_name if self.first_name else self.email

    def is_admin(self):
        return self.role == 'admin'

    def is_agent(self):
        return self.role == 'agent'
