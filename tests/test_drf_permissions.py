from django.contrib.auth.models import AnonymousUser
from django.test import override_settings
from rest_framework.test import APIRequestFactory
from rest_framework.views import APIView

from rbac_auth.permissions import HasPermission, HasRole
from tests.models import User
from tests.setup import create_fixture
from tests.test_cases import TestCase


class Visitor(object):
    is_authenticated = True
    is_superuser = False


class PostsView(APIView):
    required_roles = ('admin', 'editor')
    required_permissions = ('posts-create', 'posts-update')


class OpenView(APIView):
    pass


class TestDRFPermissions(TestCase):

    def setUp(self):
        self.fixture = create_fixture()
        self.alice, self.bob, self.carol = self.fixture.users
        self.factory = APIRequestFactory()

    def check(self, permission_class, user, view_class=PostsView):
        request = self.factory.get('/posts/')
        request.user = user
        return permission_class().has_permission(request, view_class())

    def test_has_role(self):
        self.assertTrue(self.check(HasRole, self.alice))
        self.assertTrue(self.check(HasRole, self.bob))
        self.assertFalse(self.check(HasRole, self.carol))

    def test_has_permission(self):
        self.assertTrue(self.check(HasPermission, self.bob))
        self.assertFalse(self.check(HasPermission, self.carol))
        self.fixture.roles[1].detach_permission('posts-update')
        self.assertFalse(self.check(HasPermission, self.bob))

    def test_nothing_required(self):
        self.assertTrue(self.check(HasPermission, self.carol, OpenView))
        self.assertTrue(self.check(HasRole, self.carol, OpenView))

    def test_unauthenticated(self):
        self.assertFalse(self.check(HasRole, AnonymousUser()))
        self.assertFalse(self.check(HasPermission, AnonymousUser(), OpenView))

    def test_not_a_role_holder(self):
        self.assertFalse(self.check(HasRole, Visitor()))

    def test_superuser_bypass(self):
        root = User.objects.create(username='root', is_superuser=True)
        self.assertTrue(self.check(HasPermission, root))
        with override_settings(RBAC_AUTH={'SUPERUSER_BYPASS': False}):
            self.assertFalse(self.check(HasPermission, root))
