from setuptools import find_packages, setup

from viewcomponents import __version__

install_requires = [
    "Django>=4.2,<6.0",
]

# Jinja2 is only needed for the .jinja template handler and the Jinja2 extension
jinja2_extras = [
    "Jinja2>=3.1,<4.0",
    "MarkupSafe>=2.0",
]

testing_extras = jinja2_extras + [
    "pytest>=7.0",
]

setup(
    name="django-viewcomponents",
    version=__version__,
    description="Template-backed, self-validating view components for Django.",
    packages=find_packages(exclude=["viewcomponents.tests", "viewcomponents.tests.*"]),
    include_package_data=True,
    package_data={
        "viewcomponents.test": [
            "testapp/components/*.html",
            "testapp/components/*.jinja",
            "testapp/components/templates/*.html",
            "broken_components/*.html",
            "broken_components/*.jinja",
            "broken_components/*.xyz",
        ],
    },
    license="BSD",
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require={
        "jinja2": jinja2_extras,
        "testing": testing_extras,
    },
    classifiers=[
        "Framework :: Django",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    zip_safe=False,
)
