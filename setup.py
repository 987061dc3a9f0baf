from setuptools import setup

setup(
    name='tagcodec',
    version='0',
    packages=['tagcodec'],
    python_requires='>=3.8',
    install_requires=['numpy'],
    extras_require={
        'test': ['pytest'],
    },
    url='',
    license='',
    author='',
    author_email='',
    description='Round-trip instances of registered Python classes through JSON or another text codec.'
)
