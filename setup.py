from setuptools import setup, find_packages


def readme():
    with open('README.md') as f:
        return f.read()


setup(name='discopt',
      version='1.0dev',
      description='Discrete stepwise optimization on quantized grids',
      long_description=readme(),
      long_description_content_type='text/markdown',
      classifiers=[
            'Development Status :: 2 - Pre-Alpha',
            'Intended Audience :: Science/Research',
            'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
            'Programming Language :: Python :: 3',
      ],
      keywords='optimization discrete image reconstruction',
      license='GPLv3',
      packages=find_packages(exclude=['test', 'test.*']),
      install_requires=[
            'numpy'
      ],
      extras_require={
            'test': ['pytest']
      },
      python_requires='>=3.7',
      include_package_data=True,
      zip_safe=False)
