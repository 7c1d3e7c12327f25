from setuptools import setup

setup(
	name='mprisinhibit',
	version='0.1.0',
	description='Inhibit Wayland idle while an MPRIS media player is playing',
	packages=['mprisinhibit'],
	package_dir={'':'src'},
	python_requires='>=3.8',
	install_requires=[
		'dbus-python',
		'PyGObject',
		'pywayland',
	],
	extras_require={
		'test': [
			'pytest',
		],
	},
	entry_points={
		'console_scripts': [
			'mprisinhibit=mprisinhibit:main',
		]
	}
)
