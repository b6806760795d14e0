"""
OpenDocument spreadsheet extraction.

  content:   read content.xml out of the .ods container
  convert:   LibreOffice conversion of other formats
  selection: which sheets to take
  router:    where their rows are written
  scanner:   the tag scanner that rebuilds rows and columns
"""
