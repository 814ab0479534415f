from setuptools import setup

setup(
    name='polyspline',
    version='0.0.1',
    license='MIT',
    description="Library for fitting constrained piecewise polynomial trajectories",
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=['polyspline'],
    install_requires=['numpy','scipy'],
    extras_require={'test': ['pytest']},
    keywords=['spline', 'piecewise polynomial', 'trajectory', 'motion planning'],
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Programming Language :: Python :: 3',
    ]
)
