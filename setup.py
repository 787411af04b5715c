from setuptools import find_packages, setup

NAME = 'django-rbac-auth'
DESCRIPTION = 'Role-based access control models and checks for Django.'
URL = 'https://github.com/rbac-auth/django-rbac-auth'
VERSION = "1.0.0"
TESTS_REQUIRE = [
    'pytest',
    'pytest-django',
    'django-environ',
    'flake8',
]

setup(
    description=DESCRIPTION,
    install_requires=open('install_requires.txt').readlines(),
    extras_require={'test': TESTS_REQUIRE},
    long_description=open('README.rst').read(),
    name=NAME,
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    url=URL,
    version=VERSION,
    python_requires='>=3.8',
    classifiers=[
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
