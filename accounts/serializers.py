from rest_framework import serializers

from .models import AppUser, UserRole
from .roles import get_user_active_roles, get_primary_role


class UserRoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserRole
        fields = ['id', 'role', 'start_date', 'end_date']


class AppUserSerializer(serializers.ModelSerializer):
    roles = UserRoleSerializer(many=True, read_only=True)
    active_roles = serializers.SerializerMethodField()
    primary_role = serializers.SerializerMethodField()

    class Meta:
        model = AppUser
        fields = [
            'id',
            'identifiant',
            'name',
            'email',
            'status',
            'contact',
            'department',
            'groupe_administratif',
            'join_date',
            'is_super_admin',
            'must_change_password',
            'roles',
            'active_roles',
            'primary_role',
        ]
        read_only_fields = ['identifiant', 'is_super_admin', 'must_change_password']

    def get_active_roles(self, obj):
        return get_user_active_roles(obj)

    def get_primary_role(self, obj):
        return get_primary_role(list(obj.roles.all()))
