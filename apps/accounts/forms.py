# Admin forms for the email-based User model
# (Django's default user forms expect a username field)

from django.contrib.auth.forms import BaseUserCreationForm, UserChangeForm as BaseUserChangeForm
from .models import User


class UserCreationForm(BaseUserCreationForm):

    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'company', 'role')


class UserChangeForm(BaseUserChangeForm):

    class Meta:
        model = User
        fields = '__all__'
