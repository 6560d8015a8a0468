[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fractol"
version = "0.1.0"
description = "Interactive Mandelbrot, Julia and Burning Ship fractal explorer with a small pixel-window toolkit"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["fractal", "mandelbrot", "julia", "burning-ship", "xpm", "graphics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fractol = "fractol.app:main"

[tool.hatch.build.targets.wheel]
packages = ["fractol"]

[tool.pytest.ini_options]
addopts = "-ra"
