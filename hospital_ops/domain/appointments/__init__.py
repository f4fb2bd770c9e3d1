"""Appointment domain - Appointment lifecycle"""
