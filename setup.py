"""
pdfgrammar - PDF lexical and syntactic parser
pip install -e . 또는 python setup.py install
"""

from setuptools import setup, find_packages
from pathlib import Path

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text(encoding='utf-8') if readme.exists() else ""

setup(
    name="pdfgrammar",
    version="0.1.0",
    description="PDF 어휘/구문 파서 - 순수 Python으로 PDF 객체, XRef, Content Stream 파싱",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",

    packages=find_packages(include=['pdfgrammar', 'pdfgrammar.*']),

    python_requires=">=3.8",
    install_requires=[],

    extras_require={
        'dev': ['pytest>=7.0', 'pytest-cov>=4.0'],
        'test': ['pytest>=7.0'],
    },

    entry_points={
        'console_scripts': [
            'pdfgrammar=pdfgrammar.__main__:main',
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Text Processing",
    ],

    keywords="pdf parser lexer xref content-stream",
)
