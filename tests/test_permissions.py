from rbac_auth.models import Permission, Role
from tests.setup import create_fixture
from tests.test_cases import TestCase


class TestPermission(TestCase):

    def setUp(self):
        self.fixture = create_fixture()
        self.admin, self.editor, self.auditor = self.fixture.roles
        self.create, _, _, self.reports_view, self.settings_update = (
            self.fixture.permissions
        )

    def test_defaults_to_ungrouped(self):
        permission = Permission.objects.create(name='Users invite')
        self.assertEqual('users-invite', permission.slug)
        self.assertEqual(0, permission.group_id)
        self.assertFalse(permission.has_group())
        self.assertIsNone(permission.get_group())
        self.assertIn(permission, Permission.objects.ungrouped())

    def test_get_group(self):
        self.assertEqual(self.fixture.groups[0], self.create.get_group())

    def test_has_role(self):
        self.assertTrue(self.create.has_role(self.editor))
        self.assertTrue(self.create.has_role('admin'))
        self.assertFalse(self.create.has_role('auditor'))

    def test_attach_role(self):
        self.assertTrue(self.settings_update.attach_role('editor'))
        self.assertFalse(self.settings_update.attach_role(self.editor))
        self.assertTrue(self.editor.has_permission(self.settings_update))

    def test_detach_role(self):
        self.assertEqual(1, self.create.detach_role(self.editor.pk))
        self.assertEqual(0, self.create.detach_role(self.editor.pk))
        self.assertFalse(self.editor.has_permission(self.create))

    def test_detach_all_roles(self):
        self.assertEqual(2, self.create.detach_all_roles())
        self.assertFalse(self.create.roles.exists())
        self.assertFalse(self.admin.has_permission(self.create))

    def test_for_user(self):
        alice, bob, carol = self.fixture.users
        self.assertEqual(5, Permission.objects.for_user(alice).count())
        # the auditor role is inactive
        self.assertEqual(
            {'posts-create', 'posts-update', 'posts-delete'},
            set(Permission.objects.for_user(bob).values_list(
                'slug', flat=True))
        )
        self.assertFalse(Permission.objects.for_user(carol).exists())

    def test_delete_permission_clears_pivot(self):
        self.create.delete()
        self.assertEqual(
            0,
            Role.permissions.through.objects.filter(
                permission_id=self.create.pk
            ).count()
        )

    def test_select_related_keeps_ungrouped(self):
        permissions = list(
            Permission.objects.select_related('group').order_by('pk')
        )
        self.assertEqual(Permission.objects.count(), len(permissions))
        listed = {permission.slug: permission for permission in permissions}
        self.assertIn('settings-update', listed)
        self.assertIsNone(listed['settings-update'].get_group())
        self.assertEqual(
            self.fixture.groups[0], listed['posts-create'].get_group()
        )
