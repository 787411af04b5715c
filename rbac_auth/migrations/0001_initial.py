from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

import rbac_auth.conf


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PermissionsGroup',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'permissions group',
                'db_table': rbac_auth.conf.settings.PERMISSIONS_GROUP_TABLE,
            },
        ),
        migrations.CreateModel(
            name='Permission',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('group', models.ForeignKey(blank=True, db_constraint=False, default=0, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='permissions', to='rbac_auth.permissionsgroup')),
            ],
            options={
                'db_table': rbac_auth.conf.settings.PERMISSIONS_TABLE,
            },
        ),
        migrations.CreateModel(
            name='Role',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_active', models.BooleanField(default=True)),
                ('is_locked', models.BooleanField(default=False)),
                ('permissions', models.ManyToManyField(blank=True, db_table=rbac_auth.conf.settings.PERMISSION_ROLE_TABLE, related_name='roles', to='rbac_auth.permission')),
                ('users', models.ManyToManyField(blank=True, db_table=rbac_auth.conf.settings.ROLE_USER_TABLE, related_name='roles', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': rbac_auth.conf.settings.ROLES_TABLE,
            },
        ),
    ]
