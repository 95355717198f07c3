"""Config, prompts, logging and error handling"""
