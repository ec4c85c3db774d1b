"""File system tools: read, write, edit, ls, find and grep."""