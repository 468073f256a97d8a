#!/usr/bin/env python3
"""
Configuration system for the Adventure Command System
Supports YAML files, CLI overrides, and programmatic access for hosts
"""

import yaml
import argparse
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from copy import deepcopy



@dataclass
class CommandConfig:
	"""Command registry configuration"""
	command_prefix: str = "/"
	hide_command: bool = True		# Erase the command line from the story
	declare_command: bool = True	# Replace it with "Executed /..." if no message is set

	def to_dict(self) -> Dict[str, Any]:
		"""Convert to dictionary for YAML serialization"""
		return {
			'command_prefix': self.command_prefix,
			'hide_command': self.hide_command,
			'declare_command': self.declare_command
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'CommandConfig':
		"""Create from dictionary (YAML loading)"""
		return cls(
			command_prefix=data.get('command_prefix', '/'),
			hide_command=data.get('hide_command', True),
			declare_command=data.get('declare_command', True)
		)


@dataclass
class ConsoleConfig:
	"""Console messages logging level configuration"""
	verbose: bool = False
	quiet: bool = False

	def to_dict(self) -> Dict[str, Any]:
		return {
			'verbose': self.verbose,
			'quiet': self.quiet
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'ConsoleConfig':
		return cls(
			verbose=data.get('verbose', False),
			quiet=data.get('quiet', False)
		)




@dataclass
class AdventureConfig:
	"""Complete configuration for the Adventure Command System"""
	commands: CommandConfig = field(default_factory=CommandConfig)
	console: ConsoleConfig = field(default_factory=ConsoleConfig)

	# Metadata
	config_version: str = "1.0"
	description: str = "Adventure Command System Configuration"

	def to_dict(self) -> Dict[str, Any]:
		"""Convert to dictionary for YAML serialization"""
		return {
			'config_version': self.config_version,
			'description': self.description,
			'commands': self.commands.to_dict(),
			'console': self.console.to_dict(),
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'AdventureConfig':
		"""Create from dictionary (YAML loading)"""
		config = cls()

		if 'config_version' in data:
			config.config_version = str(data['config_version'])
		if 'description' in data:
			config.description = data['description']

		if isinstance(data.get('commands'), dict):
			config.commands = CommandConfig.from_dict(data['commands'])
		if isinstance(data.get('console'), dict):
			config.console = ConsoleConfig.from_dict(data['console'])

		return config




# Keys accepted in each YAML section, for unknown-key warnings
_KNOWN_KEYS = {
	None: {'config_version', 'description', 'commands', 'console'},
	'commands': set(CommandConfig().to_dict()),
	'console': set(ConsoleConfig().to_dict()),
}


class ConfigurationManager:
	"""
	Manages configuration loading, merging, and validation
	"""

	def __init__(self, config_file: str = "adventure_commands.yaml"):
		self.config_file = config_file
		self.config = AdventureConfig()
		self.config_file_path: Optional[Path] = None

		self.logger = logging.getLogger(__name__)

		# Standard config file locations (in order of preference)
		self.config_search_paths = [
			Path.cwd() / config_file,  # Current directory
			Path.cwd() / "config" / config_file,  # Config subdirectory
			Path.home() / ".config" / "adventure_commands" / "config.yaml",  # User config
			Path("/etc/adventure_commands/config.yaml"),  # System config (Linux)
		]

	def load_config(self, config_file: Optional[str] = None) -> AdventureConfig:
		"""
		Load configuration from file with fallback chain

		Args:
			config_file: Specific config file path, or None for auto-discovery

		Returns:
			Loaded configuration object (defaults if nothing usable was found)
		"""
		if config_file:
			config_path = Path(config_file)
			if config_path.exists():
				self.config = self._load_yaml_file(config_path)
				self.config_file_path = config_path
				self.logger.info(f"Loaded config from: {config_path}")
			else:
				self.logger.warning(f"Config file not found: {config_path}")
				self.logger.info("Using default configuration")
		else:
			for path in self.config_search_paths:
				if path.exists():
					self.config = self._load_yaml_file(path)
					self.config_file_path = path
					self.logger.info(f"Auto-discovered config: {path}")
					break
			else:
				self.logger.info("No config file found, using defaults")

		return self.config

	def _load_yaml_file(self, file_path: Path) -> AdventureConfig:
		"""Load configuration from YAML file"""
		try:
			with open(file_path, 'r', encoding='utf-8') as f:
				yaml_data = yaml.safe_load(f) or {}
		except (OSError, yaml.YAMLError) as e:
			self.logger.error(f"Error loading config file {file_path}: {e}")
			return AdventureConfig()

		if not isinstance(yaml_data, dict):
			self.logger.error(f"Config file {file_path} does not contain a mapping, using defaults")
			return AdventureConfig()

		self._warn_unknown_keys(yaml_data)
		return AdventureConfig.from_dict(yaml_data)

	def _warn_unknown_keys(self, yaml_data: Dict[str, Any]):
		for key in yaml_data:
			if key not in _KNOWN_KEYS[None]:
				self.logger.warning(f"Unknown config key '{key}'")
		for section in ('commands', 'console'):
			section_data = yaml_data.get(section)
			if not isinstance(section_data, dict):
				continue
			for key in section_data:
				if key not in _KNOWN_KEYS[section]:
					self.logger.warning(f"Unknown config key '{key}' in section '{section}'")

	def merge_cli_args(self, args: argparse.Namespace) -> AdventureConfig:
		"""
		Merge CLI arguments into configuration (CLI takes precedence)

		Args:
			args: Parsed command line arguments

		Returns:
			Updated configuration
		"""
		if getattr(args, 'prefix', None):
			self.config.commands.command_prefix = args.prefix
		if getattr(args, 'show_commands', False):
			self.config.commands.hide_command = False
		if getattr(args, 'no_declare', False):
			self.config.commands.declare_command = False
		if getattr(args, 'verbose', False):
			self.config.console.verbose = True
		if getattr(args, 'quiet', False):
			self.config.console.quiet = True

		return self.config

	def save_config(self, file_path: Optional[str] = None) -> bool:
		"""
		Save current configuration to YAML file

		Args:
			file_path: Target file path, or None to use loaded file path

		Returns:
			True if saved successfully
		"""
		if file_path:
			target_path = Path(file_path)
		elif self.config_file_path:
			target_path = self.config_file_path
		else:
			target_path = Path(self.config_file)

		try:
			target_path.parent.mkdir(parents=True, exist_ok=True)

			with open(target_path, 'w', encoding='utf-8') as f:
				f.write("# Adventure Command System Configuration\n")
				f.write("# Generated configuration file\n")
				f.write(f"# Version: {self.config.config_version}\n\n")

				yaml.dump(self.config.to_dict(), f,
						 default_flow_style=False,
						 sort_keys=False,
						 indent=2)

			self.logger.info(f"Configuration saved to: {target_path}")
			return True

		except OSError as e:
			self.logger.error(f"Error saving config to {target_path}: {e}")
			return False

	def create_sample_config(self, file_path: str = "adventure_commands_sample.yaml") -> bool:
		"""Create a sample configuration file with comments"""
		try:
			with open(file_path, 'w', encoding='utf-8') as f:
				f.write(self._generate_sample_yaml())

			self.logger.info(f"Sample configuration created: {file_path}")
			return True

		except OSError as e:
			self.logger.error(f"Error creating sample config: {e}")
			return False

	def _generate_sample_yaml(self) -> str:
		"""Generate sample YAML with comments"""
		return """# Adventure Command System Configuration File

config_version: "1.0"

# =============================================================================
# COMMAND SETTINGS
# =============================================================================
commands:
  command_prefix: "/"             # Text that starts a command, e.g. /help
  hide_command: true              # Remove the command line from the story
  declare_command: true           # Show "Executed /..." in its place
                                  #   (only when the command set no message)

# =============================================================================
# CONSOLE SETTINGS
# =============================================================================
console:
  verbose: false                  # Debug logging (mode detection, dispatch)
  quiet: false                    # Warnings and errors only
"""

	def validate_config(self) -> tuple[bool, list[str]]:
		"""
		Validate configuration for common issues

		Returns:
			(is_valid, list_of_errors)
		"""
		errors = []

		prefix = self.config.commands.command_prefix
		if not isinstance(prefix, str) or not prefix:
			errors.append("Command prefix must be a non-empty string")
		elif any(ch.isspace() for ch in prefix):
			errors.append(f"Command prefix must not contain whitespace: {prefix!r}")

		for key in ('hide_command', 'declare_command'):
			if not isinstance(getattr(self.config.commands, key), bool):
				errors.append(f"commands.{key} must be true or false")

		if self.config.console.verbose and self.config.console.quiet:
			errors.append("Console cannot be both verbose and quiet")

		return len(errors) == 0, errors

	def get_config(self) -> AdventureConfig:
		"""Get current configuration"""
		return deepcopy(self.config)




def setup_logging(console: ConsoleConfig):
	"""Set up logging based on console mode"""
	if console.verbose:
		logging.basicConfig(level=logging.DEBUG, format='🐛 %(name)s: %(message)s')
	elif console.quiet:
		logging.basicConfig(level=logging.WARNING, format='⚠️  %(message)s')
	else:
		logging.basicConfig(level=logging.INFO, format='ℹ️  %(message)s')


def create_argument_parser():
	"""Argument parser for the command system demo host"""
	parser = argparse.ArgumentParser(
		description='Adventure Command System',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  %(prog)s                                 # Default settings
  %(prog)s --prefix !                      # Commands look like !help
  %(prog)s --show-commands                 # Leave command lines in the story
  %(prog)s -c my_config.yaml               # Use specific config file
  %(prog)s --create-config sample.yaml     # Create sample config file

Configuration:
  Configuration is loaded in this order (later overrides earlier):
  1. Built-in defaults
  2. Configuration file (YAML)
  3. Command line arguments

  Config file search order:
  - adventure_commands.yaml (current directory)
  - config/adventure_commands.yaml
  - ~/.config/adventure_commands/config.yaml
  - /etc/adventure_commands/config.yaml
		"""
	)

	config_group = parser.add_argument_group('Configuration')
	config_group.add_argument(
		'-c', '--config',
		type=str,
		help='Configuration file path (YAML format)'
	)
	config_group.add_argument(
		'--create-config',
		type=str,
		metavar='FILE',
		help='Create sample configuration file and exit'
	)
	config_group.add_argument(
		'--save-config',
		type=str,
		metavar='FILE',
		help='Save current configuration to file'
	)

	command_group = parser.add_argument_group('Commands')
	command_group.add_argument(
		'--prefix',
		type=str,
		help='Command prefix (default: /)'
	)
	command_group.add_argument(
		'--show-commands',
		action='store_true',
		help='Keep command lines in the story instead of hiding them'
	)
	command_group.add_argument(
		'--no-declare',
		action='store_true',
		help='Do not replace hidden commands with an "Executed" message'
	)

	console_group = parser.add_argument_group('Console')
	console_group.add_argument(
		'-v', '--verbose',
		action='store_true',
		help='Debug logging'
	)
	console_group.add_argument(
		'-q', '--quiet',
		action='store_true',
		help='Warnings and errors only'
	)

	return parser


def setup_configuration(argv=None) -> tuple[Optional[AdventureConfig], bool, Optional[ConfigurationManager]]:
	"""
	Setup configuration system with CLI integration

	Args:
		argv: Command line arguments (None for sys.argv)

	Returns:
		(config_object, should_exit, config_manager)
	"""
	parser = create_argument_parser()
	args = parser.parse_args(argv)

	manager = ConfigurationManager()

	if args.create_config:
		if manager.create_sample_config(args.create_config):
			print(f"Sample configuration created: {args.create_config}")
			print(f"Edit the file and run again with: -c {args.create_config}")
		return None, True, None

	manager.load_config(args.config)
	config = manager.merge_cli_args(args)

	is_valid, errors = manager.validate_config()
	if not is_valid:
		print("Configuration errors:")
		for error in errors:
			print(f"  ✗ {error}")
		return None, True, None

	if args.save_config:
		if manager.save_config(args.save_config):
			print(f"Configuration saved to: {args.save_config}")

	return config, False, manager
