"""Install the CueKeeper authentication gateway."""

from setuptools import setup, find_packages

setup(
    name='cuekeeper-gateway',
    version='0.1.0',
    packages=find_packages(include=['gateway', 'gateway.*'],
                           exclude=['*test*']),
    py_modules=['wsgi'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        "flask>=2.3",
        "werkzeug>=2.3",
        "click>=8.0",
        "python-json-logger>=3.1",
        "pytz",
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        'console_scripts': [
            'cuekeeper-gateway=gateway.cli:main',
        ],
    },
    zip_safe=False
)
