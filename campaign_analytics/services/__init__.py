"""Campaign analytics services"""
