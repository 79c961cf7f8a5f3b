from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


ROOT = Path(__file__).resolve().parent
PACKAGE = "coursepilot"


def read_text(path: Path, default: str = "") -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return default


def read_requirements(filename: str) -> list[str]:
    """
    Requirement lines of a requirements file. Comments and "-r" includes are
    skipped; the dev extra sits on top of install_requires anyway.
    """
    lines = (line.strip() for line in read_text(ROOT / filename).splitlines())
    return [line for line in lines if line and not line.startswith(("#", "-"))]


setup(
    name=PACKAGE,
    version=read_text(ROOT / PACKAGE / "VERSION", default="0.1.0"),
    description="CoursePilot – elective course reviews from a published Google Sheet (web API + CLI + interactive)",
    long_description=read_text(ROOT / "README.md"),
    long_description_content_type="text/markdown",
    author="CoursePilot contributors",
    project_urls={"Review form": "https://forms.gle/zd6nTbFLMtp8dofd7"},
    keywords=["course reviews", "google sheets", "gemini", "flask"],
    python_requires=">=3.10",
    packages=find_packages(exclude=("tests", ".github")),
    package_data={PACKAGE: ["VERSION"]},
    install_requires=read_requirements("requirements.txt"),
    extras_require={"dev": read_requirements("requirements-dev.txt")},
    entry_points={"console_scripts": [f"{PACKAGE}={PACKAGE}.cli:main"]},
)
