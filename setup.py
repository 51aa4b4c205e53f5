# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- UI & REACTIVE ---
    "flet>=0.28.0,<0.29",
    "FletXr>=0.1.4b3,<0.1.5",  # Reactive primitives (RxStr, RxList, ...); 0.1.5+ requires flet>=0.85

    # --- DATA & CONFIG ---
    "pydantic>=2.0.0",
    "pyyaml>=6.0.0",
    "python-dotenv>=1.0.0",

    # --- NETWORK ---
    "httpx>=0.27.0",
]

setup(
    name="material-store",
    version="0.1.0",
    description="Material Store - Flet storefront with a reactive cart",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        # --- TESTS ---
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "material-store=storefront.shop.main:run",
        ],
    },
    python_requires=">=3.10",
)
