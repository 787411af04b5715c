from django.db.models import Q

from rbac_auth.models import Permission, Role
from rbac_auth.utils import (
    count_matching,
    get_key,
    lookup_keys,
    lookup_q,
    slug_from
)
from tests.setup import create_fixture
from tests.test_cases import TestCase


class TestUtils(TestCase):

    def test_slug_from(self):
        self.assertEqual('posts-create', slug_from('Posts  Create!'))
        self.assertEqual('', slug_from(None))

    def test_get_key(self):
        role = Role.objects.create(name='Editor')
        self.assertEqual(role.pk, get_key(role, Role))
        self.assertEqual(7, get_key(7, Role))
        with self.assertRaises(ValueError):
            get_key(Role(name='Draft'), Role)
        with self.assertRaises(ValueError):
            get_key(role, Permission)

    def test_lookup_q(self):
        self.assertEqual(Q(pk=3), lookup_q(3, Role))
        self.assertEqual(Q(slug='3'), lookup_q('3', Role))
        self.assertEqual(Q(slug='posts-create'), lookup_q('Posts create', Role))
        self.assertEqual(
            Q(role__slug='admin'), lookup_q('admin', Role, prefix='role__')
        )

    def test_lookup_keys(self):
        pks, slugs = lookup_keys([1, '2', 'Admin'], Role)
        self.assertEqual({1}, pks)
        self.assertEqual({'2', 'admin'}, slugs)

    def test_count_matching(self):
        fixture = create_fixture()
        editor = fixture.roles[1]
        create = fixture.permissions[0]
        found, requested = count_matching(
            editor.permissions.all(),
            [create, 'posts-create', 'reports-view'],
            Permission
        )
        self.assertEqual((2, 3), (found, requested))
        self.assertEqual(
            (0, 0), count_matching(editor.permissions.all(), [], Permission)
        )
