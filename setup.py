"""
Setup script for SpeedMeter.

Usage:
    pip install -e .[test]      # development install
    python setup.py py2app      # build the macOS application

The py2app bundle will be in the 'dist' folder.
"""
import sys

from setuptools import find_packages, setup

APP = ['speed_meter.py']
DATA_FILES = []

OPTIONS = {
    'argv_emulation': False,
    'plist': {
        'CFBundleName': 'SpeedMeter',
        'CFBundleDisplayName': 'SpeedMeter',
        'CFBundleIdentifier': 'com.speedmeter.app',
        'CFBundleVersion': '1.0.0',
        'CFBundleShortVersionString': '1.0.0',
        'LSMinimumSystemVersion': '10.14.0',
        'LSUIElement': True,  # Hide dock icon (menu bar app)
        'NSHighResolutionCapable': True,
    },
    'packages': [
        # Our packages
        'monitor',
        'storage',
        'service',
        'config',
        'app',
    ],
    'includes': [
        'rumps',
        'psutil',
        'matplotlib',
        'matplotlib.pyplot',
        'objc',
        'Foundation',
        'AppKit',
    ],
    'excludes': [
        'tkinter',
        'pytest',
        'pip',
    ],
    'site_packages': True,
}

py2app_args = {}
if 'py2app' in sys.argv:
    py2app_args = dict(
        app=APP,
        data_files=DATA_FILES,
        options={'py2app': OPTIONS},
        setup_requires=['py2app'],
    )

setup(
    name='speedmeter',
    version='1.0.0',
    description='Menu bar network speed meter with day/week/month/year usage totals',
    python_requires='>=3.9',
    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['speed_meter'],
    install_requires=[
        'psutil>=5.9',
        'matplotlib>=3.5',
        'rumps>=0.4.0; sys_platform == "darwin"',
        'pyobjc-framework-Cocoa>=9.0; sys_platform == "darwin"',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'gui_scripts': ['speedmeter=speed_meter:main'],
    },
    **py2app_args,
)
