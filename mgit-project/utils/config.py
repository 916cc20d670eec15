# What it does: Manages all read/write operations for the repository `config` file and resolves the author identity
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import os

DEFAULT_USER_NAME = 'mgit'
DEFAULT_USER_EMAIL = 'mgit@localhost'

CORE_DEFAULTS = {
    'repositoryformatversion': '0',
    'filemode': 'true',
    'bare': 'false',
    'logallrefupdates': 'true',
}


def get_config_path(repo):  # Returns the path to the config file within the repository
    return repo.path('config')


def read_config(repo): # Reads and returns the configuration as a ConfigParser object
    config = configparser.ConfigParser()
    config_path = get_config_path(repo)
    if os.path.exists(config_path):
        config.read(config_path)
    return config


def save_config(repo, config):
    with open(get_config_path(repo), 'w') as configfile:
        config.write(configfile)


def write_config(repo, key, value): # Sets a configuration key to a value and writes it to the config file
    try:
        section, option = key.split('.', 1)
    except ValueError:
        raise ValueError("invalid key format, should be 'section.key'")
    if not section or not option:
        raise ValueError("invalid key format, should be 'section.key'")

    config = read_config(repo)
    if not config.has_section(section):
        config.add_section(section)
    config.set(section, option, value)
    save_config(repo, config)


def write_default_config(repo):
    config = configparser.ConfigParser()
    config['core'] = dict(CORE_DEFAULTS)
    save_config(repo, config)


def get_user_config(repo): # Retrieves user.name and user.email from the config, or None if not set
    config = read_config(repo)
    user_name = config.get('user', 'name', fallback=None)
    user_email = config.get('user', 'email', fallback=None)
    return user_name, user_email


def get_identity(repo): # Config first, then MGIT_AUTHOR_NAME/MGIT_AUTHOR_EMAIL, then a fixed default
    user_name, user_email = get_user_config(repo)
    name = user_name or os.environ.get('MGIT_AUTHOR_NAME') or DEFAULT_USER_NAME
    email = user_email or os.environ.get('MGIT_AUTHOR_EMAIL') or DEFAULT_USER_EMAIL
    return name, email
