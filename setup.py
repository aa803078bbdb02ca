from setuptools import find_packages, setup

setup(
    name='ipswdownloads',
    version='0.1.0',
    description='Typed async client for the ipsw.me firmware metadata API',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    python_requires='>=3.10',
    install_requires=[
        'aiohttp',
        'platformdirs',
        'PyYAML',
        'rich',
    ],
    extras_require={
        'test': [
            'pytest<9',
            'pytest-asyncio',
            'pytest-mock',
        ],
    },
    # Include other metadata as needed
)
