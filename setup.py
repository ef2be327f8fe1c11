from setuptools import setup, find_packages

setup(
    name='str2table',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=['pyarrow', 'numpy', 'openpyxl'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'str2table=str2table.cli:main'  # Entry point to main function
        ]
    },
    author='str2table Team',
    description='A Python-based tool for turning delimited text into typed tables',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='LGPLv3.0',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    python_requires='>=3.11',
)
