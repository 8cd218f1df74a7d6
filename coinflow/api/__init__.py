"""User commands, messages, triggers, signals and exchange interfaces."""